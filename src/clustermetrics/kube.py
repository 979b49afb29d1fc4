"""
Kubernetes API client construction.

Tries in-cluster configuration first, then a kubeconfig file. An explicit
API server URL overrides the host from either source.
"""

from __future__ import annotations

import structlog
from kubernetes import client, config

from clustermetrics.core.errors import FatalConfigurationError

logger = structlog.get_logger()


def create_api_client(
    apiserver: str | None = None,
    kubeconfig: str | None = None,
    context: str | None = None,
) -> client.ApiClient:
    """
    Build an ApiClient for the target cluster.

    Args:
        apiserver: API server URL overriding the configured host
        kubeconfig: Path to kubeconfig file (skips in-cluster config when set)
        context: Kubeconfig context to use

    Raises:
        FatalConfigurationError: If no usable configuration can be loaded
    """
    configuration = client.Configuration()
    source = "kubeconfig"

    try:
        if kubeconfig:
            config.load_kube_config(
                config_file=kubeconfig,
                context=context,
                client_configuration=configuration,
            )
        else:
            try:
                config.load_incluster_config(client_configuration=configuration)
                source = "incluster"
            except config.ConfigException:
                config.load_kube_config(context=context, client_configuration=configuration)
    except config.ConfigException as e:
        raise FatalConfigurationError(
            f"Failed to load Kubernetes config: {e}",
            details={"kubeconfig": kubeconfig, "context": context},
        ) from e

    if apiserver:
        configuration.host = apiserver

    logger.debug("kube_client_configured", source=source, host=configuration.host)
    return client.ApiClient(configuration)


def custom_objects_api(api_client: client.ApiClient) -> client.CustomObjectsApi:
    """Get CustomObjectsApi client."""
    return client.CustomObjectsApi(api_client)
