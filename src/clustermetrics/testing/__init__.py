"""
Test support: order-insensitive metric text comparison and scenario helpers.
"""

from clustermetrics.testing.cases import (
    GenerateMetricsTestCase,
    new_condition,
    new_condition_with_time,
)
from clustermetrics.testing.compare import (
    ComparisonResult,
    canonicalize,
    compare_output,
    filter_metrics,
    metric_name,
    remove_unused_whitespace,
    sort_by_line,
    sort_labels,
)

__all__ = [
    "ComparisonResult",
    "GenerateMetricsTestCase",
    "canonicalize",
    "compare_output",
    "filter_metrics",
    "metric_name",
    "new_condition",
    "new_condition_with_time",
    "remove_unused_whitespace",
    "sort_by_line",
    "sort_labels",
]
