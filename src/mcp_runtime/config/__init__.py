"""Configuration management for the MCP runtime."""

from .loader import CONFIG_ENV_VAR, load_config_file, load_server_config
from .schemas import DocumentConfig, ServerConfig, validate_server_config

__all__ = [
    # Loader
    "CONFIG_ENV_VAR",
    "load_config_file",
    "load_server_config",
    # Schemas
    "ServerConfig",
    "DocumentConfig",
    "validate_server_config",
]
