"""Configuration module for chromekit.

This module provides YAML configuration parsing for chromekit.yaml and
environment variable overrides.
"""

from chromekit.config.parser import (
    ChromeKitConfig,
    ConfigError,
    ENV_OVERRIDES,
    load_config,
    parse_config,
)

__all__ = [
    "ChromeKitConfig",
    "ConfigError",
    "ENV_OVERRIDES",
    "load_config",
    "parse_config",
]
