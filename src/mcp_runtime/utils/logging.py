"""Logging configuration for the MCP runtime.

Every handler writes to stderr or a file: stdout carries protocol messages
only. Records logged while serving a request carry the request's id and
method, passed as ``extra={"context": {"request_id": ..., "method": ...}}``.
Both are lifted out of the context so they can be filtered on directly, and
the rest of the context is kept as ``fields``.
"""

import json
import logging
import sys
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

# Context keys promoted to top-level LogEntry fields
REQUEST_KEYS = ("request_id", "method")


class LogLevel(str, Enum):
    """Log level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogEntry(BaseModel):
    """One server log line.

    Attributes:
        timestamp: ISO-8601 local time the record was created
        level: Log level name
        logger: Logger name
        message: Rendered message
        request_id: Id of the request being served, if any
        method: Method of the request being served, if any
        source: ``module:function:line`` of the logging call
        fields: Remaining ``extra`` context
        exception: Formatted traceback, if the record carries one
    """

    timestamp: str
    level: str
    logger: str
    message: str
    request_id: Optional[str | int] = None
    method: Optional[str] = None
    source: Optional[str] = None
    fields: dict[str, Any] = Field(default_factory=dict)
    exception: Optional[str] = None

    @classmethod
    def from_record(cls, record: logging.LogRecord, exception: Optional[str] = None) -> "LogEntry":
        """Build an entry from a log record, lifting request keys out of its context."""
        context = dict(getattr(record, "context", None) or {})
        request = {key: context.pop(key, getattr(record, key, None)) for key in REQUEST_KEYS}
        return cls(
            timestamp=datetime.fromtimestamp(record.created).isoformat(timespec="milliseconds"),
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
            source=f"{record.module}:{record.funcName}:{record.lineno}",
            fields=context,
            exception=exception,
            **request,
        )

    @property
    def request_tag(self) -> str:
        """`` [request=<id> method=<method>]`` or an empty string outside a request."""
        parts = []
        if self.request_id is not None:
            parts.append(f"request={self.request_id}")
        if self.method is not None:
            parts.append(f"method={self.method}")
        return f" [{' '.join(parts)}]" if parts else ""


class StructuredFormatter(logging.Formatter):
    """Formats records as one JSON object or one text line each.

    Args:
        format_type: Output format ("json" or "text")
    """

    def __init__(self, format_type: str = "json") -> None:
        super().__init__()
        self.format_type = format_type

    def format(self, record: logging.LogRecord) -> str:
        exception = self.formatException(record.exc_info) if record.exc_info else None
        entry = LogEntry.from_record(record, exception)

        if self.format_type == "json":
            return json.dumps(entry.model_dump(exclude_none=True), default=str)

        text = f"{entry.timestamp} [{entry.level}] {entry.logger}: {entry.message}{entry.request_tag}"
        if entry.exception:
            text += "\n" + entry.exception
        return text


class ColoredFormatter(logging.Formatter):
    """Short colored lines for an interactive terminal."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    DIM = "\033[2m"
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        entry = LogEntry.from_record(record)
        color = self.COLORS.get(entry.level, "")

        line = f"[{color}{entry.level}{self.RESET}] {entry.logger}: {entry.message}"
        if entry.request_tag:
            line += f"{self.DIM}{entry.request_tag}{self.RESET}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    level: str | LogLevel = "INFO",
    format_type: str = "text",
    use_colors: bool = True,
    log_file: str | None = None,
) -> None:
    """Configure the root logger for a server process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Output format ("json", "text")
        use_colors: Color console output when stderr is a TTY (text only)
        log_file: Optional file that receives the same records
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper() if isinstance(level, str) else level.value))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    if use_colors and format_type == "text" and sys.stderr.isatty():
        console_handler.setFormatter(ColoredFormatter())
    else:
        console_handler.setFormatter(StructuredFormatter(format_type=format_type))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredFormatter(format_type=format_type))
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (usually __name__ of the module)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
