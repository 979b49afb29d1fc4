"""Core modules for clustermetrics - centralized definitions and utilities."""

from clustermetrics.core.errors import (
    ClusterMetricsError,
    ConfigurationError,
    ExitCode,
    FatalConfigurationError,
    MalformedInputError,
    MismatchError,
    ProviderError,
    TypeMismatchError,
    ValidationError,
    format_error_message,
    main_with_error_handling,
)

__all__ = [
    "ExitCode",
    "ClusterMetricsError",
    "ConfigurationError",
    "FatalConfigurationError",
    "ProviderError",
    "ValidationError",
    "TypeMismatchError",
    "MalformedInputError",
    "MismatchError",
    "main_with_error_handling",
    "format_error_message",
]
