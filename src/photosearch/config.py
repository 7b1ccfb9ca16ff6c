"""Configuration loader for photosearch.

This module handles loading and parsing configuration from YAML files,
with support for environment variable expansion.

Example:
    config = load_config()
    if config.secrets.backend == "sqlite":
        print(f"Secrets DB: {config.secrets.db_path}")
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from photosearch.constants import CONFIG_FILE_NAME
from photosearch.exceptions import ConfigError
from photosearch.models import PhotoSearchConfig

# Pattern to match ${VAR_NAME} or $VAR_NAME
ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values.

    Supports both ${VAR_NAME} and $VAR_NAME syntax.
    If the env var is not set, the placeholder is left unchanged.

    Args:
        value: The value to expand (can be str, dict, list, or primitive).

    Returns:
        The value with environment variables expanded.
    """
    if isinstance(value, str):

        def replace_env_var(match: re.Match[str]) -> str:
            var_name = match.group(1) or match.group(2)
            return os.environ.get(var_name, match.group(0))

        return ENV_VAR_PATTERN.sub(replace_env_var, value)

    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [expand_env_vars(item) for item in value]

    else:
        return value


def find_config_file() -> Path | None:
    """Search for .photosearch.yaml in current and parent directories.

    Returns:
        Path to the config file if found, None otherwise.
    """
    current = Path.cwd()

    for directory in [current, *current.parents]:
        config_file = directory / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

    return None


def read_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping from disk.

    Args:
        path: File to read.

    Returns:
        The parsed mapping; an empty file yields an empty dict.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}", details={"error": str(e)}) from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")

    return data


def load_config(config_path: Path | None = None) -> PhotoSearchConfig:
    """Load configuration from YAML file.

    Environment variables in the format ${VAR_NAME} or $VAR_NAME are expanded.

    Args:
        config_path: Path to config file. If None, searches for .photosearch.yaml
                    in current directory and parent directories.

    Returns:
        Loaded configuration, or defaults when no file exists.

    Raises:
        ConfigError: If the file cannot be parsed or fails validation.
    """
    if config_path is None:
        config_path = find_config_file()

    if config_path is None or not config_path.exists():
        return PhotoSearchConfig()

    data = expand_env_vars(read_yaml(config_path))

    try:
        return PhotoSearchConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid configuration in {config_path}",
            details={"errors": e.error_count()},
        ) from e
