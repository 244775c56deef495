"""Configuration loader for the MCP runtime.

This module provides functionality for loading YAML and JSON configurations
with environment variable expansion support.
"""

import json
import os
import re
from pathlib import Path
from typing import Any

import yaml

from .schemas import ServerConfig, validate_server_config

# Environment variable naming the config file when none is given explicitly
CONFIG_ENV_VAR = "MCP_RUNTIME_CONFIG"

# Pattern for environment variable substitution: ${VAR_NAME} or ${VAR_NAME:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def _expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in a value.

    Supports ${VAR} and ${VAR:-default} syntax.

    Args:
        value: The value to expand (can be str, dict, list)

    Returns:
        The value with environment variables expanded
    """
    if isinstance(value, str):
        def replace_env_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default)

        return ENV_VAR_PATTERN.sub(replace_env_var, value)

    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]

    return value


def load_yaml_file(file_path: str | Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dictionary.

    Args:
        file_path: Path to the YAML file

    Returns:
        Dictionary containing the YAML contents

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the file is not valid YAML
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config_file(
    file_path: str | Path,
    config_type: str = "auto",
    expand_env: bool = True,
) -> dict[str, Any]:
    """Load a configuration file (YAML or JSON) with optional environment variable expansion.

    Args:
        file_path: Path to the configuration file
        config_type: Type of config ("yaml", "json", or "auto" to detect from extension)
        expand_env: Whether to expand environment variables

    Returns:
        Dictionary containing the configuration

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file type is unsupported or invalid
    """
    path = Path(file_path)

    # Auto-detect file type
    if config_type == "auto":
        suffix = path.suffix.lower()
        if suffix in [".yaml", ".yml"]:
            config_type = "yaml"
        elif suffix == ".json":
            config_type = "json"
        else:
            raise ValueError(f"Cannot detect config type from extension: {suffix}")

    if config_type == "yaml":
        config = load_yaml_file(path)
    elif config_type == "json":
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")
        with open(path, "r", encoding="utf-8") as f:
            config = json.load(f)
    else:
        raise ValueError(f"Unsupported config type: {config_type}")

    if not isinstance(config, dict):
        raise ValueError(f"Configuration root must be a mapping: {file_path}")

    if expand_env:
        config = _expand_env_vars(config)

    return config


def load_server_config(file_path: str | Path | None = None) -> ServerConfig:
    """Load and validate the server configuration.

    The path defaults to the ``MCP_RUNTIME_CONFIG`` environment variable.
    With neither set, the built-in defaults are returned.

    Args:
        file_path: Path to the configuration file

    Returns:
        Validated ServerConfig object

    Raises:
        FileNotFoundError: If an explicitly named file doesn't exist
        ValidationError: If the configuration is invalid
    """
    if file_path is None:
        file_path = os.environ.get(CONFIG_ENV_VAR) or None

    if file_path is None:
        return ServerConfig()

    config_data = load_config_file(file_path)

    # Accept either a bare mapping or one nested under "server"
    if isinstance(config_data.get("server"), dict):
        config_data = config_data["server"]

    return validate_server_config(config_data)
