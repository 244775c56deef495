"""HandlerResult class for the MCP runtime.

Every handler invocation produces a HandlerResult: either a success value
or a fault description. The dispatcher turns faults into HandlerFailure
error responses.
"""

from typing import Any, Optional


class HandlerResult:
    """Result of a handler invocation.

    Attributes:
        success: Whether the handler completed normally
        value: Result value (if successful)
        error: Fault description (if failed)
    """

    def __init__(
        self,
        success: bool,
        value: Any = None,
        error: Optional[str] = None,
    ):
        self.success = success
        self.value = value
        self.error = error

    @classmethod
    def ok(cls, value: Any) -> "HandlerResult":
        """Wrap a successful return value."""
        return cls(success=True, value=value)

    @classmethod
    def fault(cls, error: str) -> "HandlerResult":
        """Wrap a fault description."""
        return cls(success=False, error=error)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "HandlerResult":
        """Describe an exception raised by a handler.

        Args:
            exc: The raised exception

        Returns:
            Fault result carrying the exception message (or its type name
            when the message is empty)
        """
        return cls.fault(str(exc) or type(exc).__name__)

    def __repr__(self) -> str:
        """String representation of the result."""
        if self.success:
            return f"HandlerResult(success={self.success}, value={self.value!r})"
        return f"HandlerResult(success={self.success}, error={self.error})"
