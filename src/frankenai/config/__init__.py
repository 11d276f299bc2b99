"""Configuration loading for franken-ai."""

from frankenai.config.ignore import IgnorePatterns, load_ignore_patterns
from frankenai.config.loader import ConfigError, load_config
from frankenai.config.models import FrankenAIConfig

__all__ = [
    "ConfigError",
    "FrankenAIConfig",
    "IgnorePatterns",
    "load_config",
    "load_ignore_patterns",
]
