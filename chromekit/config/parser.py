"""YAML configuration parser for chromekit.

This module parses chromekit.yaml files and applies environment overrides.

Example chromekit.yaml:

    version: 1
    tool_cache_dir: /opt/hostedtoolcache/chromekit
    temp_dir: /tmp/chromekit
    download_timeout: 60
    download_retries: 5
    lock_timeout: 120
    resolve_browser_version_only: false
    platform: linux-amd64
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml


class ConfigError(Exception):
    """Configuration parsing or validation error."""

    pass


# Environment variable -> config field
ENV_OVERRIDES = {
    "CHROMEKIT_TOOL_CACHE": "tool_cache_dir",
    "CHROMEKIT_TEMP": "temp_dir",
    "CHROMEKIT_DOWNLOAD_TIMEOUT": "download_timeout",
    "CHROMEKIT_DOWNLOAD_RETRIES": "download_retries",
}

_PATH_FIELDS = ("tool_cache_dir", "temp_dir")
_INT_FIELDS = ("download_timeout", "download_retries", "lock_timeout")


@dataclass
class ChromeKitConfig:
    """Complete chromekit configuration."""

    tool_cache_dir: Optional[Path] = None  # None: directory.get_tool_cache_dir()
    temp_dir: Optional[Path] = None  # None: directory.get_temp_dir()
    download_timeout: int = 30
    download_retries: int = 3
    lock_timeout: int = 60
    resolve_browser_version_only: bool = False
    platform: Optional[str] = None  # 'os-arch'; None: detect


def parse_config(config_path: Path) -> ChromeKitConfig:
    """
    Parse chromekit.yaml configuration file.

    Args:
        config_path: Path to chromekit.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        raise ConfigError("Configuration file is empty")

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    return _parse_and_validate(data)


def _parse_and_validate(data: dict) -> ChromeKitConfig:
    """Parse and validate configuration data."""
    if "version" not in data:
        raise ConfigError("Missing required field: version")

    if data["version"] != 1:
        raise ConfigError(f"Unsupported version: {data['version']} (expected 1)")

    values = {key: value for key, value in data.items() if key != "version"}
    return _build(ChromeKitConfig(), values)


def _build(base: ChromeKitConfig, values: Mapping[str, object]) -> ChromeKitConfig:
    known = set(ChromeKitConfig.__dataclass_fields__)
    fields: Dict[str, object] = dict(base.__dict__)

    for key, value in values.items():
        if key not in known:
            raise ConfigError(f"Unknown configuration field: {key}")

        if key in _PATH_FIELDS:
            if not isinstance(value, (str, Path)) or not str(value):
                raise ConfigError(f"{key} must be a non-empty path")
            fields[key] = Path(value).expanduser()
        elif key in _INT_FIELDS:
            fields[key] = _parse_positive_int(key, value)
        elif key == "resolve_browser_version_only":
            if not isinstance(value, bool):
                raise ConfigError(f"{key} must be true or false")
            fields[key] = value
        elif key == "platform":
            if not isinstance(value, str) or "-" not in value:
                raise ConfigError(f"platform must look like 'os-arch', got: {value}")
            fields[key] = value

    return ChromeKitConfig(**fields)


def _parse_positive_int(key: str, value: object) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a positive integer, got: {value}")

    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be a positive integer, got: {value}")

    if number <= 0:
        raise ConfigError(f"{key} must be a positive integer, got: {value}")
    return number


def load_config(
    config_path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None
) -> ChromeKitConfig:
    """
    Load configuration from an optional file plus environment overrides.

    Environment variables (see ENV_OVERRIDES) win over file values.

    Args:
        config_path: Optional chromekit.yaml to start from
        environ: Environment mapping (default: os.environ)

    Raises:
        ConfigError: If the file or an override is invalid
    """
    config = parse_config(config_path) if config_path else ChromeKitConfig()

    environ = os.environ if environ is None else environ
    overrides = {
        field_name: environ[var]
        for var, field_name in ENV_OVERRIDES.items()
        if environ.get(var)
    }

    return _build(config, overrides) if overrides else config
