"""Configuration module for lokio."""

from lokio.config.loader import (
    DEFAULT_CONFIG_PATH,
    ConfigLoadError,
    create_example_config,
    load_config,
)
from lokio.config.models import CatalogSettings, LokioConfig

__all__ = [
    "CatalogSettings",
    "LokioConfig",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "create_example_config",
    "ConfigLoadError",
]
