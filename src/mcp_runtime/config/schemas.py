"""Configuration schemas for the MCP runtime.

This module defines Pydantic models for validating configuration data.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from ..models.messages import LOG_LEVELS
from ..protocol.framing import DEFAULT_MAX_LINE_BYTES


class DocumentConfig(BaseModel):
    """An extra document served by the document resource."""

    title: str = Field(..., description="Document title")
    mime_type: str = Field(default="text/plain", description="Content type")
    content: str = Field(..., description="Document body")


class ServerConfig(BaseModel):
    """Configuration for the stdio server."""

    name: str = Field(default="mcp-demo-server", description="Server name reported to clients")
    version: str = Field(default="1.0.0", description="Server version reported to clients")
    protocol_version: str = Field(default="2025-06-18", description="MCP protocol version")
    instructions: str | None = Field(None, description="Usage hints returned from initialize")
    concurrent: bool = Field(default=False, description="Handle requests as concurrent tasks")
    max_concurrency: int = Field(default=16, ge=1, description="In-flight request limit (concurrent mode)")
    max_line_bytes: int = Field(
        default=DEFAULT_MAX_LINE_BYTES, ge=1024, description="Longest accepted input line"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Process log level (stderr)"
    )
    log_format: Literal["text", "json"] = Field(default="text", description="Process log format")
    log_file: str | None = Field(None, description="Optional log file")
    notification_level: str = Field(
        default="debug", description="Least severe level sent as log notifications"
    )
    documents: dict[str, DocumentConfig] = Field(
        default_factory=dict, description="Documents added to the document store"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        """Accept lowercase log level names."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("notification_level")
    @classmethod
    def validate_notification_level(cls, v: str) -> str:
        """Validate that the level is an RFC 5424 name."""
        if v.lower() not in LOG_LEVELS:
            raise ValueError(f"notification_level must be one of: {', '.join(LOG_LEVELS)}")
        return v.lower()


def validate_server_config(data: dict[str, Any]) -> ServerConfig:
    """Validate server configuration data.

    Args:
        data: Raw configuration dictionary

    Returns:
        Validated ServerConfig object

    Raises:
        ValidationError: If the configuration is invalid
    """
    return ServerConfig(**data)
