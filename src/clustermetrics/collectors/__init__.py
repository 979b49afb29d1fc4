"""
Metric collectors for Open Cluster Management resources.
"""

from clustermetrics.collectors.managedcluster import (
    DESC_CLUSTER_INFO_DEFAULT_LABELS,
    DESC_CLUSTER_INFO_HELP,
    DESC_CLUSTER_INFO_NAME,
    ManagedClusterListWatch,
    get_hub_cluster_id,
    get_managed_cluster_metric_families,
    managed_cluster_family_generators,
    wrap_managed_cluster_func,
)
from clustermetrics.collectors.store import MetricsStore, apply_event, run_watch

__all__ = [
    "DESC_CLUSTER_INFO_NAME",
    "DESC_CLUSTER_INFO_HELP",
    "DESC_CLUSTER_INFO_DEFAULT_LABELS",
    "ManagedClusterListWatch",
    "get_hub_cluster_id",
    "get_managed_cluster_metric_families",
    "managed_cluster_family_generators",
    "wrap_managed_cluster_func",
    "MetricsStore",
    "apply_event",
    "run_watch",
]
