"""Configuration loading from TOML files and environment variables."""

import os
import tomllib
from pathlib import Path

from pydantic import ValidationError

from simplecli.config.defaults import (
    DEFAULT_CONFIG_TOML,
    ENV_HISTORY,
    ENV_LOG_LEVEL,
    ENV_PROMPT,
    get_config_path,
)
from simplecli.config.schema import SimpleCLIConfig
from simplecli.exceptions import ConfigError, ConfigValidationError

# Global config instance (singleton)
_config: SimpleCLIConfig | None = None


def load_config(
    config_path: Path | None = None,
    *,
    create_if_missing: bool = False,
) -> SimpleCLIConfig:
    """Load configuration from TOML file and environment variables.

    Args:
        config_path: Path to config file. If None, uses default.
        create_if_missing: Write the default config if the file doesn't exist.

    Returns:
        Loaded and validated configuration.

    Raises:
        ConfigError: If configuration cannot be loaded.
        ConfigValidationError: If configuration is invalid.
    """
    path = config_path or get_config_path()

    if not path.exists():
        if not create_if_missing:
            return _apply_env_overrides(SimpleCLIConfig())
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(DEFAULT_CONFIG_TOML)
        except OSError as e:
            raise ConfigError(f"Failed to create config at {path}: {e}") from e

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    try:
        config = SimpleCLIConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration in {path}: {e}") from e

    return _apply_env_overrides(config)


def _apply_env_overrides(config: SimpleCLIConfig) -> SimpleCLIConfig:
    """Apply environment variable overrides to configuration."""
    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        config.logging.level = log_level.upper()

    prompt = os.environ.get(ENV_PROMPT)
    if prompt:
        config.shell.prompt = prompt

    history = os.environ.get(ENV_HISTORY)
    if history:
        config.shell.history_file = Path(history).expanduser()

    return config


def get_config() -> SimpleCLIConfig:
    """Get the current configuration (singleton).

    Loads config on first access, caches for subsequent calls.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: SimpleCLIConfig) -> None:
    """Install an explicitly loaded configuration as the singleton."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the configuration singleton (mainly for testing)."""
    global _config
    _config = None
