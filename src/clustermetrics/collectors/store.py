"""
In-memory metric store fed by the ManagedCluster list/watch loop.

Generated families are kept per object, keyed by uid, and read back as a
snapshot at scrape time.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Iterable, List, Optional

import structlog
from kubernetes.client.exceptions import ApiException

from clustermetrics.core.errors import ProviderError, TypeMismatchError
from clustermetrics.metrics.models import FamilyGenerator, MetricFamily, compose_metric_gen_funcs

logger = structlog.get_logger()


def _object_key(obj: Any) -> str:
    return obj.uid or obj.name


class MetricsStore:
    """Thread-safe map from object key to the families generated for it."""

    def __init__(self, generators: Iterable[FamilyGenerator]):
        self._generate = compose_metric_gen_funcs(generators)
        self._lock = threading.Lock()
        self._families: Dict[str, List[MetricFamily]] = {}

    def add(self, obj: Any) -> None:
        families = self._generate(obj)
        with self._lock:
            self._families[_object_key(obj)] = families

    update = add

    def delete(self, obj: Any) -> None:
        with self._lock:
            self._families.pop(_object_key(obj), None)

    def replace(self, objs: Iterable[Any]) -> None:
        """Swap the whole store content for the families of objs."""
        fresh = {_object_key(obj): self._generate(obj) for obj in objs}
        with self._lock:
            self._families = fresh

    def families(self) -> List[MetricFamily]:
        with self._lock:
            return [f for families in self._families.values() for f in families]

    def __len__(self) -> int:
        with self._lock:
            return len(self._families)


def apply_event(store: MetricsStore, event_type: str, obj: Any) -> None:
    """Apply one watch event to the store."""
    log = logger.bind(event_type=event_type, name=getattr(obj, "name", None))

    if event_type in ("ADDED", "MODIFIED"):
        try:
            store.update(obj)
        except TypeMismatchError as e:
            log.warning("object_skipped", error=e.message)
            return
        log.debug("object_stored")
    elif event_type == "DELETED":
        store.delete(obj)
        log.debug("object_removed")
    else:
        log.warning("unknown_event_type")


def run_watch(
    list_watch: Any,
    store: MetricsStore,
    stop: Optional[threading.Event] = None,
) -> None:
    """
    Keep the store in sync with the API server.

    Lists once, then watches from the last seen resource version. When the
    server reports the resource version as expired (410) the loop relists.

    Args:
        list_watch: Object with list() and watch(resource_version) methods
        store: Store to update
        stop: Optional event; the loop returns once it is set
    """
    resource_version: Optional[str] = None

    while stop is None or not stop.is_set():
        if resource_version is None:
            objs, resource_version = list_watch.list()
            store.replace(objs)
            logger.info("objects_listed", count=len(objs), resource_version=resource_version)

        try:
            for event_type, obj in list_watch.watch(resource_version):
                if stop is not None and stop.is_set():
                    return
                apply_event(store, event_type, obj)
                resource_version = obj.metadata.resource_version or resource_version
        except ApiException as e:
            if e.status != 410:
                raise ProviderError(
                    "Watch failed",
                    details={"status": e.status, "reason": e.reason},
                ) from e
            logger.info("watch_expired_relisting", resource_version=resource_version)
            resource_version = None
