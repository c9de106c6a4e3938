"""Configuration loading and validation."""

from m365cli.config.loader import load_config
from m365cli.config.schema import (
    AuthConfig,
    Config,
    GraphConfig,
    PaginationConfig,
    TelemetryConfig,
)

__all__ = [
    "AuthConfig",
    "Config",
    "GraphConfig",
    "PaginationConfig",
    "TelemetryConfig",
    "load_config",
]
