"""
Typed models for the custom resources clustermetrics reads.

Objects arrive from the custom-objects API as unstructured dicts and are
decoded here with Pydantic, so the rest of the package only ever sees
typed values.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


@dataclass(frozen=True)
class GroupVersionResource:
    """Identifies a resource collection on the API server."""

    group: str
    version: str
    resource: str

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}"


MANAGED_CLUSTER_GVR = GroupVersionResource(
    group="cluster.open-cluster-management.io",
    version="v1",
    resource="managedclusters",
)

CLUSTER_VERSION_GVR = GroupVersionResource(
    group="config.openshift.io",
    version="v1",
    resource="clusterversions",
)

# The ClusterVersion singleton is always named "version"
CLUSTER_VERSION_NAME = "version"


class _KubeModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ObjectMeta(_KubeModel):
    """Subset of Kubernetes object metadata."""

    name: str = Field("", description="Object name")
    namespace: Optional[str] = Field(None, description="Namespace, None when cluster scoped")
    uid: str = Field("", description="Unique object id")
    resource_version: str = Field("", alias="resourceVersion")
    labels: Dict[str, str] = Field(default_factory=dict)

    @field_validator("labels", mode="before")
    @classmethod
    def _null_labels(cls, value: Any) -> Any:
        return {} if value is None else value


class ConditionStatus(str, Enum):
    """Status values of a metav1.Condition."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


class Condition(_KubeModel):
    """A status condition as reported on ManagedCluster objects."""

    type: str
    status: ConditionStatus
    last_transition_time: Optional[datetime] = Field(None, alias="lastTransitionTime")
    reason: str = ""
    message: str = ""


class ManagedClusterVersion(_KubeModel):
    kubernetes: str = ""


class ManagedClusterStatus(_KubeModel):
    version: ManagedClusterVersion = Field(default_factory=ManagedClusterVersion)
    conditions: List[Condition] = Field(default_factory=list)

    @field_validator("version", mode="before")
    @classmethod
    def _null_version(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("conditions", mode="before")
    @classmethod
    def _null_conditions(cls, value: Any) -> Any:
        return [] if value is None else value


class ManagedCluster(_KubeModel):
    """An Open Cluster Management ManagedCluster."""

    api_version: str = Field(MANAGED_CLUSTER_GVR.api_version, alias="apiVersion")
    kind: str = "ManagedCluster"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    status: ManagedClusterStatus = Field(default_factory=ManagedClusterStatus)

    @field_validator("status", mode="before")
    @classmethod
    def _null_status(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def uid(self) -> str:
        return self.metadata.uid

    @property
    def labels(self) -> Dict[str, str]:
        return self.metadata.labels

    @classmethod
    def from_unstructured(cls, obj: Dict[str, Any]) -> "ManagedCluster":
        """Decode an unstructured API object; raises pydantic.ValidationError."""
        return cls.model_validate(obj)


class ClusterVersionSpec(_KubeModel):
    cluster_id: str = Field(..., alias="clusterID")


class ClusterVersion(_KubeModel):
    """The OpenShift ClusterVersion singleton (only the fields we need)."""

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: ClusterVersionSpec

    @classmethod
    def from_unstructured(cls, obj: Dict[str, Any]) -> "ClusterVersion":
        """Decode an unstructured API object; raises pydantic.ValidationError."""
        return cls.model_validate(obj)
