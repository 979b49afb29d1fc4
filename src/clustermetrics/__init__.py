"""
clustermetrics - Prometheus metrics for Open Cluster Management managed clusters.
"""

__version__ = "0.1.0"
