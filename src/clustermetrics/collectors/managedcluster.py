"""
ManagedCluster metric families.

Resolves the hub cluster id once from the ClusterVersion singleton and
exposes one info metric per ManagedCluster carrying that id alongside the
cluster's name, vendor, cloud and Kubernetes version.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

import structlog
from kubernetes import watch
from kubernetes.client.exceptions import ApiException
from pydantic import ValidationError as PydanticValidationError

from clustermetrics.core.errors import (
    FatalConfigurationError,
    ProviderError,
    TypeMismatchError,
)
from clustermetrics.metrics.models import FamilyGenerator, Metric, MetricFamily, MetricType
from clustermetrics.resources import (
    CLUSTER_VERSION_GVR,
    CLUSTER_VERSION_NAME,
    MANAGED_CLUSTER_GVR,
    ClusterVersion,
    ManagedCluster,
)

logger = structlog.get_logger()

DESC_CLUSTER_INFO_NAME = "ocm_managedcluster_info"
DESC_CLUSTER_INFO_HELP = "Managed cluster information"
DESC_CLUSTER_INFO_DEFAULT_LABELS = ["cluster_id", "name", "vendor", "cloud", "version"]


def get_hub_cluster_id(custom_api: Any) -> str:
    """
    Fetch the hub's ClusterVersion singleton and return its cluster id.

    Makes exactly one attempt. Callers wanting retries must wrap this call.

    Args:
        custom_api: kubernetes CustomObjectsApi (or compatible)

    Raises:
        FatalConfigurationError: If the object cannot be fetched or decoded
    """
    gvr = CLUSTER_VERSION_GVR
    try:
        obj = custom_api.get_cluster_custom_object(
            gvr.group, gvr.version, gvr.resource, CLUSTER_VERSION_NAME
        )
    except ApiException as e:
        raise FatalConfigurationError(
            "Error getting cluster version",
            details={"status": e.status, "reason": e.reason},
        ) from e
    except Exception as e:
        raise FatalConfigurationError(f"Error getting cluster version: {e}") from e

    try:
        cluster_version = ClusterVersion.from_unstructured(obj)
    except PydanticValidationError as e:
        raise FatalConfigurationError(
            "Error decoding cluster version object",
            details={"errors": e.error_count()},
        ) from e

    logger.info("hub_cluster_id_resolved", cluster_id=cluster_version.spec.cluster_id)
    return cluster_version.spec.cluster_id


def wrap_managed_cluster_func(
    f: Callable[[ManagedCluster], MetricFamily],
) -> Callable[[Any], MetricFamily]:
    """
    Adapt a ManagedCluster-typed function to the generic generator signature.

    Rejects anything that is not a ManagedCluster and gives every returned
    metric its own copy of the label lists.
    """

    @functools.wraps(f)
    def wrapper(obj: Any) -> MetricFamily:
        if not isinstance(obj, ManagedCluster):
            raise TypeMismatchError(
                f"expected ManagedCluster, got {type(obj).__name__}",
                details={"type": type(obj).__name__},
            )

        family = f(obj)

        for m in family.metrics:
            m.label_keys = list(m.label_keys)
            m.label_values = list(m.label_values)

        return family

    return wrapper


def managed_cluster_family_generators(hub_id: str) -> List[FamilyGenerator]:
    """Build the ManagedCluster family generators for a resolved hub cluster id."""

    def cluster_info(mc: ManagedCluster) -> MetricFamily:
        labels = mc.labels
        label_values = [
            hub_id,
            mc.name,
            labels.get("vendor", ""),
            labels.get("cloud", ""),
            mc.status.version.kubernetes,
        ]
        return MetricFamily(
            metrics=[
                Metric(
                    label_keys=DESC_CLUSTER_INFO_DEFAULT_LABELS,
                    label_values=label_values,
                    value=1,
                )
            ]
        )

    return [
        FamilyGenerator(
            name=DESC_CLUSTER_INFO_NAME,
            type=MetricType.GAUGE,
            help=DESC_CLUSTER_INFO_HELP,
            generate_func=wrap_managed_cluster_func(cluster_info),
        ),
    ]


def get_managed_cluster_metric_families(custom_api: Any) -> List[FamilyGenerator]:
    """Resolve the hub cluster id and return the ManagedCluster family generators."""
    hub_id = get_hub_cluster_id(custom_api)
    return managed_cluster_family_generators(hub_id)


@dataclass
class ManagedClusterListWatch:
    """
    List and watch ManagedClusters through the custom-objects API.

    Items are decoded to ManagedCluster before they leave this class.
    """

    custom_api: Any
    timeout_seconds: int = 300

    def list(self) -> Tuple[List[ManagedCluster], str]:
        """Return all ManagedClusters and the list's resource version."""
        gvr = MANAGED_CLUSTER_GVR
        try:
            result = self.custom_api.list_cluster_custom_object(
                gvr.group, gvr.version, gvr.resource
            )
        except ApiException as e:
            raise ProviderError(
                "Failed to list managed clusters",
                details={"status": e.status, "reason": e.reason},
            ) from e

        items = []
        for item in result.get("items") or []:
            cluster = _decode_managed_cluster(item)
            if cluster is not None:
                items.append(cluster)
        resource_version = (result.get("metadata") or {}).get("resourceVersion", "")
        return items, resource_version

    def watch(self, resource_version: str) -> Iterator[Tuple[str, ManagedCluster]]:
        """
        Stream (event type, ManagedCluster) pairs starting at resource_version.

        Ends when the server-side timeout expires. An expired resource
        version surfaces as ApiException with status 410. Objects that do
        not decode are logged and skipped.
        """
        gvr = MANAGED_CLUSTER_GVR
        w = watch.Watch()
        for event in w.stream(
            self.custom_api.list_cluster_custom_object,
            gvr.group,
            gvr.version,
            gvr.resource,
            resource_version=resource_version,
            timeout_seconds=self.timeout_seconds,
        ):
            cluster = _decode_managed_cluster(event["object"])
            if cluster is not None:
                yield event["type"], cluster


def _decode_managed_cluster(obj: Dict[str, Any]) -> Optional[ManagedCluster]:
    try:
        return ManagedCluster.from_unstructured(obj)
    except PydanticValidationError as e:
        metadata = obj.get("metadata") if isinstance(obj, dict) else None
        logger.warning(
            "managed_cluster_skipped",
            name=(metadata or {}).get("name"),
            errors=e.error_count(),
        )
        return None
