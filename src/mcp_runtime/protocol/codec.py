"""Message codec for the MCP runtime.

Decodes request lines into ``Request`` models and encodes responses and
notifications into compact JSON lines tagged with ``"jsonrpc": "2.0"``.
"""

import json
from typing import Any

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from ..models import Notification, Request, Response
from .errors import PARSE_ERROR, MalformedMessage

JSONRPC_VERSION = "2.0"

ALLOWED_FIELDS = frozenset({"jsonrpc", "id", "method", "params"})

# Raised by encode for values that have no strict JSON form
ENCODE_ERRORS = (ValueError, TypeError, RecursionError, PydanticSerializationError)


def _recover_id(message: dict[str, Any]) -> str | int | None:
    """Return the message id if it is usable for correlation."""
    request_id = message.get("id")
    if isinstance(request_id, (str, int)) and not isinstance(request_id, bool):
        return request_id
    return None


def decode(data: bytes) -> Request:
    """Decode one message into a Request.

    Args:
        data: Raw message bytes (one line, delimiter stripped)

    Returns:
        Decoded request; ``id`` is None for client notifications

    Raises:
        MalformedMessage: If the bytes are not a valid request envelope
    """
    try:
        message = json.loads(data.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise MalformedMessage(f"Message is not valid UTF-8: {e}", code=PARSE_ERROR) from e
    except json.JSONDecodeError as e:
        raise MalformedMessage(f"Message is not valid JSON: {e.msg}", code=PARSE_ERROR) from e

    if not isinstance(message, dict):
        raise MalformedMessage(f"Message must be a JSON object, got {type(message).__name__}")

    request_id = _recover_id(message)

    extra = sorted(set(message) - ALLOWED_FIELDS)
    if extra:
        raise MalformedMessage(f"Unexpected fields: {', '.join(extra)}", request_id=request_id)

    if "jsonrpc" in message and message["jsonrpc"] != JSONRPC_VERSION:
        raise MalformedMessage(
            f"Unsupported jsonrpc version: {message['jsonrpc']!r}", request_id=request_id
        )

    if "id" in message and request_id is None:
        raise MalformedMessage("Field 'id' must be a string or integer")

    method = message.get("method")
    if not isinstance(method, str) or not method:
        raise MalformedMessage("Field 'method' must be a non-empty string", request_id=request_id)

    params = message.get("params")
    if params is None:
        params = {}
    elif not isinstance(params, dict):
        raise MalformedMessage("Field 'params' must be an object", request_id=request_id)

    return Request(id=request_id, method=method, params=params)


def _to_jsonable(value: Any) -> Any:
    """Dump pydantic models (at any depth) into plain JSON values."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, dict):
        return {str(k): _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


def encode(message: Response | Notification | Request) -> bytes:
    """Encode a message as one compact JSON line (without delimiter).

    Args:
        message: Response, Notification, or Request to encode

    Returns:
        UTF-8 encoded JSON

    Raises:
        ValueError: If a value is not finite, is circular, or cannot be
            serialized (see ``ENCODE_ERRORS`` for the full set)
    """
    envelope: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION}

    if isinstance(message, Response):
        envelope["id"] = message.id
        if message.error is not None:
            envelope["error"] = message.error.model_dump()
        else:
            envelope["result"] = _to_jsonable(message.result)
    elif isinstance(message, Notification):
        envelope["method"] = message.method
        envelope["params"] = _to_jsonable(message.params)
    elif isinstance(message, Request):
        if message.id is not None:
            envelope["id"] = message.id
        envelope["method"] = message.method
        envelope["params"] = _to_jsonable(message.params)
    else:
        raise TypeError(f"Cannot encode {type(message).__name__}")

    return json.dumps(envelope, separators=(",", ":"), default=str, allow_nan=False).encode("utf-8")
