"""
Data models for generated metrics.

A FamilyGenerator turns one resource object into one MetricFamily. Families
are kept as plain records until exposition, where they are converted to
prometheus_client metrics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List

from clustermetrics.core.errors import ValidationError


class MetricType(str, Enum):
    """Prometheus metric types."""

    COUNTER = "counter"
    GAUGE = "gauge"
    UNKNOWN = "unknown"


@dataclass
class Metric:
    """
    One observation within a family.

    label_keys and label_values are positional: the value at index i belongs
    to the key at index i. A label missing from the source object is the
    empty string, never absent.
    """

    label_keys: List[str]
    label_values: List[str]
    value: float = 1

    def __post_init__(self) -> None:
        if len(self.label_keys) != len(self.label_values):
            raise ValidationError(
                f"label_keys and label_values differ in length: "
                f"{len(self.label_keys)} != {len(self.label_values)}"
            )

    def labels(self) -> Dict[str, str]:
        return dict(zip(self.label_keys, self.label_values))


@dataclass
class MetricFamily:
    """A named, typed group of metrics sharing help text."""

    name: str = ""
    type: MetricType = MetricType.GAUGE
    help: str = ""
    metrics: List[Metric] = field(default_factory=list)


GenerateFunc = Callable[[Any], MetricFamily]


@dataclass(frozen=True)
class FamilyGenerator:
    """Describes one exposed metric family and how to build it from an object."""

    name: str
    type: MetricType
    help: str
    generate_func: GenerateFunc

    def generate(self, obj: Any) -> MetricFamily:
        family = self.generate_func(obj)
        family.name = self.name
        family.type = self.type
        family.help = self.help
        return family


def compose_metric_gen_funcs(
    generators: Iterable[FamilyGenerator],
) -> Callable[[Any], List[MetricFamily]]:
    """Combine generators into one function producing every family for an object."""
    generators = list(generators)

    def generate_all(obj: Any) -> List[MetricFamily]:
        return [g.generate(obj) for g in generators]

    return generate_all
