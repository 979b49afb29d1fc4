"""
clustermetrics configuration.

Pydantic-based settings read from CLUSTERMETRICS_* environment variables
and an optional .env file.
"""

from clustermetrics.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
