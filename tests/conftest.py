"""Root test configuration."""

import logging

import pytest
import structlog

from clustermetrics.resources import ManagedCluster


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def make_managed_cluster(
    name="cluster-a",
    labels=None,
    version="1.21",
    uid=None,
    resource_version="",
):
    """Build a ManagedCluster the way the API would return it."""
    return ManagedCluster.from_unstructured(
        {
            "apiVersion": "cluster.open-cluster-management.io/v1",
            "kind": "ManagedCluster",
            "metadata": {
                "name": name,
                "uid": uid if uid is not None else f"uid-{name}",
                "resourceVersion": resource_version,
                "labels": labels,
            },
            "status": {"version": {"kubernetes": version}},
        }
    )


@pytest.fixture
def managed_cluster():
    """ManagedCluster carrying vendor and cloud labels."""
    return make_managed_cluster(labels={"vendor": "OpenShift", "cloud": "AWS"})


@pytest.fixture
def make_cluster():
    """Factory fixture for ManagedCluster objects."""
    return make_managed_cluster
