"""Configuration management."""

from simplecli.config.loader import get_config, load_config, reset_config
from simplecli.config.schema import SimpleCLIConfig

__all__ = ["SimpleCLIConfig", "get_config", "load_config", "reset_config"]
