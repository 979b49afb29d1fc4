"""
Application settings using Pydantic.

Provides environment-based configuration loading with CLUSTERMETRICS_ prefix.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CLUSTERMETRICS_",
    )

    # Kubernetes API
    apiserver: str | None = None
    kubeconfig: str | None = None
    kube_context: str | None = None

    # Exposition endpoint
    host: str = "0.0.0.0"
    port: int = 8080

    # Watch loop
    watch_timeout_seconds: int = 300

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
