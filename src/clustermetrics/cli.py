"""
clustermetrics command line interface.

Commands:
    serve   Watch ManagedClusters and expose their metrics over HTTP
    hub-id  Resolve and print the hub cluster id
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

import structlog
from prometheus_client import CollectorRegistry, start_http_server

from clustermetrics.collectors import (
    ManagedClusterListWatch,
    MetricsStore,
    get_hub_cluster_id,
    get_managed_cluster_metric_families,
    run_watch,
)
from clustermetrics.config import Settings, get_settings
from clustermetrics.core.errors import main_with_error_handling
from clustermetrics.kube import create_api_client, custom_objects_api
from clustermetrics.logging import configure_logging
from clustermetrics.metrics import FamiliesCollector

logger = structlog.get_logger()


@main_with_error_handling()
def serve_command(settings: Settings) -> int:
    """Resolve the hub id, start the metrics endpoint and run the watch loop."""
    api = custom_objects_api(
        create_api_client(settings.apiserver, settings.kubeconfig, settings.kube_context)
    )

    # Fails with FatalConfigurationError before anything is served.
    generators = get_managed_cluster_metric_families(api)
    store = MetricsStore(generators)

    registry = CollectorRegistry()
    registry.register(FamiliesCollector(store.families))
    start_http_server(settings.port, addr=settings.host, registry=registry)
    logger.info("metrics_endpoint_started", host=settings.host, port=settings.port)

    run_watch(
        ManagedClusterListWatch(api, timeout_seconds=settings.watch_timeout_seconds),
        store,
    )
    return 0


@main_with_error_handling()
def hub_id_command(settings: Settings) -> int:
    """Print the hub cluster id."""
    api = custom_objects_api(
        create_api_client(settings.apiserver, settings.kubeconfig, settings.kube_context)
    )
    print(get_hub_cluster_id(api))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clustermetrics",
        description="Prometheus metrics for Open Cluster Management managed clusters",
    )
    parser.add_argument("--apiserver", help="Kubernetes API server URL")
    parser.add_argument("--kubeconfig", help="Path to kubeconfig file")
    parser.add_argument("--context", dest="kube_context", help="Kubeconfig context to use")
    parser.add_argument("--log-level", dest="log_level", help="Log level (default: INFO)")

    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Serve managed cluster metrics")
    serve_parser.add_argument("--host", help="Address to bind the metrics endpoint to")
    serve_parser.add_argument("--port", type=int, help="Port for the metrics endpoint")
    serve_parser.add_argument(
        "--watch-timeout",
        dest="watch_timeout_seconds",
        type=int,
        help="Server-side watch timeout in seconds",
    )

    subparsers.add_parser("hub-id", help="Print the hub cluster id")

    return parser


def resolve_settings(args: argparse.Namespace, base: Settings | None = None) -> Settings:
    """Overlay CLI flags that were given onto settings from the environment."""
    base = base or get_settings()
    overrides = {}
    for key in ("apiserver", "kubeconfig", "kube_context", "log_level", "host", "port", "watch_timeout_seconds"):
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value
    return base.model_copy(update=overrides)


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    settings = resolve_settings(args)
    configure_logging(settings.log_level)

    if args.command == "serve":
        sys.exit(serve_command(settings))

    if args.command == "hub-id":
        sys.exit(hub_id_command(settings))


if __name__ == "__main__":
    main()
