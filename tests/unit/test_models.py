"""Unit tests for data models."""

import pytest
from pydantic import ValidationError

from mcp_runtime.models import (
    CapabilityKind,
    ErrorObject,
    HandlerDescriptor,
    HandlerResult,
    ParamSpec,
    PromptMessage,
    Request,
    Response,
)
from mcp_runtime.protocol.errors import MethodNotFound


class TestRequest:
    """Tests for Request model."""

    def test_request_is_immutable(self):
        """Test that a decoded request cannot be changed."""
        request = Request(id=1, method="ping")

        with pytest.raises(ValidationError):
            request.method = "other"


class TestResponse:
    """Tests for Response model."""

    def test_success(self):
        """Test building a success response."""
        response = Response.success(1, {"ok": True})

        assert response.result == {"ok": True}
        assert response.error is None
        assert not response.is_error

    def test_success_with_none_result(self):
        """Test that None is a valid result."""
        response = Response.success(1, None)

        assert not response.is_error

    def test_failure(self):
        """Test building an error response from an exception."""
        error = MethodNotFound("Unknown tool: x").to_error_object()
        response = Response.failure(1, error)

        assert response.is_error
        assert response.error == ErrorObject(kind="MethodNotFound", message="Unknown tool: x", code=-32601)

    def test_requires_result_or_error(self):
        """Test that an empty response is invalid."""
        with pytest.raises(ValidationError):
            Response(id=1)

    def test_rejects_result_and_error(self):
        """Test that a response cannot be both success and failure."""
        error = ErrorObject(kind="HandlerFailure", message="x", code=-32603)

        with pytest.raises(ValidationError):
            Response(id=1, result=1, error=error)


class TestHandlerDescriptor:
    """Tests for HandlerDescriptor model."""

    def test_tool(self):
        """Test describing a tool."""
        descriptor = HandlerDescriptor.tool(
            "roll_dice",
            "Roll dice",
            [ParamSpec(name="count", type="integer"), ParamSpec(name="sides", type="integer", required=False)],
        )

        assert descriptor.kind == CapabilityKind.TOOL
        assert descriptor.input_schema() == {
            "type": "object",
            "properties": {"count": {"type": "integer"}, "sides": {"type": "integer"}},
            "required": ["count"],
        }

    def test_resource_params_from_template(self):
        """Test that resource params come from the template placeholders."""
        descriptor = HandlerDescriptor.resource("files://{dir}/{name}", "Files", "File access")

        assert [p.name for p in descriptor.params] == ["dir", "name"]
        assert all(p.required and p.type == "string" for p in descriptor.params)
        assert descriptor.is_template
        assert not HandlerDescriptor.resource("status://server", "Status", "").is_template

    def test_duplicate_param_names(self):
        """Test that parameter names must be unique."""
        with pytest.raises(ValidationError, match="Duplicate parameter"):
            HandlerDescriptor.tool("t", "", [ParamSpec(name="a"), ParamSpec(name="a")])

    def test_invalid_param_name(self):
        """Test that parameter names must be identifiers."""
        with pytest.raises(ValidationError):
            ParamSpec(name="not valid")

    def test_array_schema(self):
        """Test the JSON schema of an array parameter."""
        spec = ParamSpec(name="numbers", type="array", items="number", description="Values")

        assert spec.to_json_schema() == {"type": "array", "description": "Values", "items": {"type": "number"}}

    def test_listing(self):
        """Test the discovery listing of a resource."""
        listing = HandlerDescriptor.resource(
            "timestamp://now", "Current Timestamp", "Now", mime_type="application/json"
        ).to_listing()

        assert listing["kind"] == "resource"
        assert listing["title"] == "Current Timestamp"
        assert listing["mimeType"] == "application/json"
        assert listing["params"] == []


class TestHandlerResult:
    """Tests for HandlerResult."""

    def test_ok(self):
        """Test a successful result."""
        result = HandlerResult.ok(3)

        assert result.success
        assert result.value == 3
        assert result.error is None

    def test_from_exception(self):
        """Test that exceptions are described by their message."""
        assert HandlerResult.from_exception(RuntimeError("boom")).error == "boom"
        assert HandlerResult.from_exception(KeyError()).error == "KeyError"

    def test_prompt_message_helpers(self):
        """Test the user/assistant message builders."""
        message = PromptMessage.assistant("hi")

        assert message.role == "assistant"
        assert message.content.text == "hi"
        assert message.content.type == "text"
