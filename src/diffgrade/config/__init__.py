"""Configuration loading, schema, and defaults."""

from diffgrade.config.loader import ConfigError, load_config
from diffgrade.config.schema import DiffgradeConfig, ReportFormat

__all__ = [
    "ConfigError",
    "DiffgradeConfig",
    "ReportFormat",
    "load_config",
]
