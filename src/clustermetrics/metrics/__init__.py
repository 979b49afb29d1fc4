"""
Metric models and exposition helpers.
"""

from clustermetrics.metrics.exposition import (
    FamiliesCollector,
    render_text,
    to_prometheus_metrics,
)
from clustermetrics.metrics.models import (
    FamilyGenerator,
    GenerateFunc,
    Metric,
    MetricFamily,
    MetricType,
    compose_metric_gen_funcs,
)

__all__ = [
    "FamilyGenerator",
    "GenerateFunc",
    "Metric",
    "MetricFamily",
    "MetricType",
    "compose_metric_gen_funcs",
    "FamiliesCollector",
    "render_text",
    "to_prometheus_metrics",
]
