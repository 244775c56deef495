"""Wire message models for the MCP runtime.

This module defines the request, response, and notification envelopes
exchanged over the stdio transport.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


RequestId = str | int

# RFC 5424 severities, least to most severe
LOG_LEVELS = ("debug", "info", "notice", "warning", "error", "critical", "alert", "emergency")


class Request(BaseModel):
    """An incoming call.

    Attributes:
        id: Correlation token; None for client notifications
        method: Method name ("<kind>/<name>" or a protocol method)
        params: Method parameters
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[RequestId] = None
    method: str
    params: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_notification(self) -> bool:
        """Check if this message expects no response.

        Returns:
            True if the message carries no id
        """
        return self.id is None


class ErrorObject(BaseModel):
    """Error payload of a failed response.

    Attributes:
        kind: Stable error kind string
        message: Human-readable description
        code: JSON-RPC error code
    """

    kind: str
    message: str
    code: int


class Response(BaseModel):
    """Outcome of a request: exactly one of result or error is set.

    Attributes:
        id: Id of the request being answered (None if it was unrecoverable)
        result: Handler result
        error: Error payload
    """

    id: Optional[RequestId] = None
    result: Any = None
    error: Optional[ErrorObject] = None

    @model_validator(mode="after")
    def check_result_xor_error(self) -> "Response":
        """Enforce that a response is either a success or a failure."""
        has_result = "result" in self.model_fields_set
        if self.error is not None and has_result:
            raise ValueError("Response cannot carry both result and error")
        if self.error is None and not has_result:
            raise ValueError("Response must carry either result or error")
        return self

    @classmethod
    def success(cls, request_id: Optional[RequestId], result: Any) -> "Response":
        """Build a success response.

        Args:
            request_id: Id of the answered request
            result: Result value (may be None)

        Returns:
            Response with result set
        """
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: Optional[RequestId], error: ErrorObject) -> "Response":
        """Build an error response.

        Args:
            request_id: Id of the answered request
            error: Error payload

        Returns:
            Response with error set
        """
        return cls(id=request_id, error=error)

    @property
    def is_error(self) -> bool:
        return self.error is not None


class Notification(BaseModel):
    """Server-to-client message with no id.

    Attributes:
        method: "log" or "progress"
        params: Notification payload
    """

    method: Literal["log", "progress"]
    params: dict[str, Any] = Field(default_factory=dict)
