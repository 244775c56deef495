"""Error kinds for the MCP runtime.

Each error carries a stable ``kind`` string that is reported to clients, and
the JSON-RPC error code MCP clients expect for it.
"""

from typing import Optional

from ..models.messages import ErrorObject

# JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class McpRuntimeError(Exception):
    """Base class for all runtime errors.

    Attributes:
        kind: Stable error kind string
        code: JSON-RPC error code
        message: Human-readable description
    """

    kind: str = "RuntimeError"
    code: int = INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_error_object(self) -> ErrorObject:
        """Convert to the wire error object.

        Returns:
            ErrorObject with kind, message, and code
        """
        return ErrorObject(kind=self.kind, message=self.message, code=self.code)


class MalformedMessage(McpRuntimeError):
    """Raised when an incoming line is not a valid request envelope.

    The request id is kept when it could be recovered so the error response
    can still be correlated by the client.
    """

    kind = "MalformedMessage"
    code = INVALID_REQUEST

    def __init__(
        self,
        message: str,
        request_id: Optional[str | int] = None,
        code: int = INVALID_REQUEST,
    ) -> None:
        super().__init__(message)
        self.request_id = request_id
        self.code = code


class MethodNotFound(McpRuntimeError):
    """Raised when a method does not resolve to a registered capability."""

    kind = "MethodNotFound"
    code = METHOD_NOT_FOUND


class InvalidParams(McpRuntimeError):
    """Raised when request params do not satisfy a handler's schema."""

    kind = "InvalidParams"
    code = INVALID_PARAMS


class HandlerFailure(McpRuntimeError):
    """A handler raised or returned a fault."""

    kind = "HandlerFailure"
    code = INTERNAL_ERROR


class DuplicateCapability(McpRuntimeError):
    """Raised at startup when a capability is registered twice."""

    kind = "DuplicateCapability"


class FramingError(McpRuntimeError):
    """Raised when the input stream cannot be split into messages."""

    kind = "FramingError"


class RegistryFrozenError(McpRuntimeError):
    """Raised when registering after the server has started."""

    kind = "RegistryFrozen"


class ExchangeClosedError(McpRuntimeError):
    """Raised when a handler uses its exchange after returning."""

    kind = "ExchangeClosed"
