"""Wire protocol: framing, codec, and error kinds."""

from .codec import JSONRPC_VERSION, decode, encode
from .errors import (
    DuplicateCapability,
    ExchangeClosedError,
    FramingError,
    HandlerFailure,
    InvalidParams,
    MalformedMessage,
    McpRuntimeError,
    MethodNotFound,
    RegistryFrozenError,
)
from .framing import DEFAULT_MAX_LINE_BYTES, LineFramer, open_stdio_framer

__all__ = [
    # Codec
    "JSONRPC_VERSION",
    "decode",
    "encode",
    # Framing
    "DEFAULT_MAX_LINE_BYTES",
    "LineFramer",
    "open_stdio_framer",
    # Errors
    "McpRuntimeError",
    "MalformedMessage",
    "MethodNotFound",
    "InvalidParams",
    "HandlerFailure",
    "DuplicateCapability",
    "FramingError",
    "RegistryFrozenError",
    "ExchangeClosedError",
]
