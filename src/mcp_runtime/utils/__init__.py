"""Utility modules for the MCP runtime."""

from .logging import ColoredFormatter, LogEntry, LogLevel, StructuredFormatter, get_logger, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "LogLevel",
    "LogEntry",
    "StructuredFormatter",
    "ColoredFormatter",
]
