"""Configuration for kube-sections."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class SectionsConfig(BaseSettings):
    """Configuration for adapters and cluster access.

    Loaded from environment variables with KUBE_SECTIONS_ prefix
    or from a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="KUBE_SECTIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )

    # Cluster access
    kubeconfig_path: Path | None = Field(
        default=None,
        description="Path to kubeconfig file (default: in-cluster config, then ~/.kube/config)",
    )
    kubeconfig_context: str | None = Field(
        default=None,
        description="Kubeconfig context to use",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for each cluster request made by the accessor",
    )

    # Plugins
    load_entrypoint_plugins: bool = Field(
        default=True,
        description="Discover external adapter plugins from the kube_sections.plugins entry point",
    )


@lru_cache
def get_config() -> SectionsConfig:
    """Get the process-wide configuration instance."""
    return SectionsConfig()
