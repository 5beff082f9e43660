"""Configuration loading utilities."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from lokio.config.models import LokioConfig

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "lokio" / "config.yaml"
CONFIG_ENV_VAR = "LOKIO_CONFIG"


class ConfigLoadError(Exception):
    """Raised when configuration cannot be loaded or validated."""

    pass


def _resolve_config_path(config_path: Optional[str]) -> Optional[Path]:
    """Pick the configuration file to read.

    An explicit path wins, then ``$LOKIO_CONFIG``, then the default location.
    Returns None when no explicit path was given and no file exists.
    """
    if config_path is not None:
        return Path(config_path)

    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


def load_config(config_path: Optional[str] = None) -> LokioConfig:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to configuration file. If None, uses $LOKIO_CONFIG or
                    ~/.config/lokio/config.yaml, falling back to built-in defaults
                    when neither exists.

    Returns:
        Validated LokioConfig instance

    Raises:
        ConfigLoadError: If an explicitly requested file is missing, the YAML is
            invalid, or validation fails
    """
    config_file = _resolve_config_path(config_path)
    if config_file is None:
        return LokioConfig()

    if not config_file.exists():
        raise ConfigLoadError(
            f"Configuration file not found: {config_file}\n"
            f"Run 'lokio config init' to create one."
        )

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {config_file}: {e}") from e
    except OSError as e:
        raise ConfigLoadError(f"Failed to read {config_file}: {e}") from e

    if config_data is None:
        raise ConfigLoadError(f"Configuration file is empty: {config_file}")

    if not isinstance(config_data, dict):
        raise ConfigLoadError(f"Configuration must be a mapping: {config_file}")

    try:
        return LokioConfig(**config_data)
    except ValidationError as e:
        raise ConfigLoadError(f"Configuration validation failed:\n{e}") from e


def create_example_config(output_path: str = str(DEFAULT_CONFIG_PATH)) -> Path:
    """Create an example configuration file holding the defaults.

    Args:
        output_path: Where to write the example config

    Returns:
        Path of the written file

    Raises:
        ConfigLoadError: If file cannot be written
    """
    example_config = LokioConfig().model_dump(mode="json")

    output_file = Path(output_path)

    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, "w", encoding="utf-8") as f:
            yaml.dump(example_config, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise ConfigLoadError(f"Failed to write example config to {output_path}: {e}") from e

    return output_file
