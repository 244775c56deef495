"""MCP Runtime.

A minimal Model Context Protocol server runtime over stdio: line-delimited
JSON framing, a capability registry of tools, resources, and prompts, and a
dispatcher that lets handlers stream log and progress notifications before
their response.
"""

from .config import ServerConfig, load_server_config
from .models import (
    CapabilityKind,
    ErrorObject,
    HandlerDescriptor,
    HandlerResult,
    Notification,
    ParamSpec,
    PromptMessage,
    PromptResult,
    ReadResourceResult,
    Request,
    Response,
)
from .protocol import (
    DuplicateCapability,
    FramingError,
    HandlerFailure,
    InvalidParams,
    MalformedMessage,
    McpRuntimeError,
    MethodNotFound,
)
from .server import CapabilityRegistry, Dispatcher, Exchange, McpServer, run_stdio

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Messages
    "Request",
    "Response",
    "ErrorObject",
    "Notification",
    # Capabilities
    "CapabilityKind",
    "HandlerDescriptor",
    "ParamSpec",
    "HandlerResult",
    "ReadResourceResult",
    "PromptMessage",
    "PromptResult",
    # Errors
    "McpRuntimeError",
    "MalformedMessage",
    "MethodNotFound",
    "InvalidParams",
    "HandlerFailure",
    "DuplicateCapability",
    "FramingError",
    # Server
    "CapabilityRegistry",
    "Dispatcher",
    "Exchange",
    "McpServer",
    "run_stdio",
    # Configuration
    "ServerConfig",
    "load_server_config",
]
