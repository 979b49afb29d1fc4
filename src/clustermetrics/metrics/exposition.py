"""
Exposition of generated families through prometheus_client.

The same conversion backs both the HTTP endpoint and render_text(), so
tests see exactly the text a scrape would return.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, List

from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.metrics_core import Metric as PrometheusMetric
from prometheus_client.registry import Collector

from clustermetrics.metrics.models import MetricFamily


def to_prometheus_metrics(families: Iterable[MetricFamily]) -> List[PrometheusMetric]:
    """Convert families to prometheus_client metrics, merging families that share a name."""
    merged: dict[str, PrometheusMetric] = {}

    for family in families:
        metric = merged.get(family.name)
        if metric is None:
            metric = PrometheusMetric(family.name, family.help, family.type.value)
            merged[family.name] = metric
        for record in family.metrics:
            metric.add_sample(family.name, record.labels(), record.value)

    return list(merged.values())


class FamiliesCollector(Collector):
    """Prometheus collector yielding whatever families the source returns at scrape time."""

    def __init__(self, source: Callable[[], Iterable[MetricFamily]]):
        self.source = source

    def collect(self) -> Iterator[PrometheusMetric]:
        yield from to_prometheus_metrics(self.source())


def render_text(families: Iterable[MetricFamily]) -> str:
    """Serialize families in the text exposition format."""
    families = list(families)
    registry = CollectorRegistry()
    registry.register(FamiliesCollector(lambda: families))
    return generate_latest(registry).decode("utf-8")
