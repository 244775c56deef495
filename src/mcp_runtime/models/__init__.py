"""Data models for the MCP runtime."""

from .content import PromptMessage, PromptResult, ReadResourceResult, ResourceContents, TextContent
from .descriptor import CapabilityKind, HandlerDescriptor, ParamSpec, ParamType
from .messages import LOG_LEVELS, ErrorObject, Notification, Request, RequestId, Response
from .result import HandlerResult

__all__ = [
    # Messages
    "Request",
    "RequestId",
    "Response",
    "ErrorObject",
    "Notification",
    "LOG_LEVELS",
    # Descriptors
    "CapabilityKind",
    "HandlerDescriptor",
    "ParamSpec",
    "ParamType",
    # Results
    "HandlerResult",
    "TextContent",
    "ResourceContents",
    "ReadResourceResult",
    "PromptMessage",
    "PromptResult",
]
