"""Unit tests for the message codec."""

import json

import pytest

from mcp_runtime.models import ErrorObject, Notification, ReadResourceResult, Request, Response
from mcp_runtime.protocol.codec import ENCODE_ERRORS, decode, encode
from mcp_runtime.protocol.errors import INVALID_REQUEST, PARSE_ERROR, MalformedMessage


class TestDecode:
    """Tests for decoding request lines."""

    def test_decode_request(self):
        """Test decoding a complete request."""
        request = decode(b'{"jsonrpc":"2.0","id":1,"method":"tool/add","params":{"a":2,"b":3}}')

        assert request.id == 1
        assert request.method == "tool/add"
        assert request.params == {"a": 2, "b": 3}
        assert not request.is_notification

    def test_decode_without_version_or_params(self):
        """Test that jsonrpc and params are optional."""
        request = decode(b'{"id":"abc","method":"ping"}')

        assert request.id == "abc"
        assert request.params == {}

    def test_decode_notification(self):
        """Test that a message without id is a notification."""
        request = decode(b'{"jsonrpc":"2.0","method":"notifications/initialized"}')

        assert request.id is None
        assert request.is_notification

    def test_values_pass_through_untyped(self):
        """Test that param values are not coerced by the codec."""
        request = decode(b'{"id":1,"method":"tool/add","params":{"a":"2","b":3.5}}')

        assert request.params == {"a": "2", "b": 3.5}

    def test_invalid_json(self):
        """Test that unparsable input is a parse error."""
        with pytest.raises(MalformedMessage) as exc_info:
            decode(b'{"id":1,"method":')

        assert exc_info.value.code == PARSE_ERROR
        assert exc_info.value.request_id is None

    def test_invalid_utf8(self):
        """Test that undecodable bytes are a parse error."""
        with pytest.raises(MalformedMessage) as exc_info:
            decode(b'\xff\xfe{"id":1}')

        assert exc_info.value.code == PARSE_ERROR

    def test_non_object(self):
        """Test that a JSON array is rejected."""
        with pytest.raises(MalformedMessage, match="JSON object"):
            decode(b"[1, 2, 3]")

    def test_extra_field_keeps_id(self):
        """Test that unexpected fields are rejected but the id is recovered."""
        with pytest.raises(MalformedMessage) as exc_info:
            decode(b'{"id":7,"method":"ping","extra":true}')

        assert exc_info.value.request_id == 7
        assert exc_info.value.code == INVALID_REQUEST
        assert "extra" in exc_info.value.message

    def test_missing_method(self):
        """Test that a request without a method is rejected."""
        with pytest.raises(MalformedMessage) as exc_info:
            decode(b'{"id":3}')

        assert exc_info.value.request_id == 3

    @pytest.mark.parametrize("raw_id", ["true", "null", "1.5", "[1]"])
    def test_invalid_id(self, raw_id):
        """Test that ids must be strings or integers."""
        with pytest.raises(MalformedMessage, match="'id'"):
            decode(f'{{"id":{raw_id},"method":"ping"}}'.encode())

    def test_params_must_be_object(self):
        """Test that positional params are rejected."""
        with pytest.raises(MalformedMessage, match="params"):
            decode(b'{"id":1,"method":"tool/add","params":[2,3]}')

    def test_wrong_version(self):
        """Test that another jsonrpc version is rejected."""
        with pytest.raises(MalformedMessage, match="version"):
            decode(b'{"jsonrpc":"1.0","id":1,"method":"ping"}')


class TestEncode:
    """Tests for encoding outgoing messages."""

    def test_encode_success(self):
        """Test encoding a success response."""
        data = json.loads(encode(Response.success(1, 5.0)))

        assert data == {"jsonrpc": "2.0", "id": 1, "result": 5.0}

    def test_encode_null_result(self):
        """Test that a None result is still written."""
        data = json.loads(encode(Response.success("a", None)))

        assert "result" in data
        assert data["result"] is None

    def test_encode_failure(self):
        """Test encoding an error response."""
        error = ErrorObject(kind="MethodNotFound", message="Unknown tool: nope", code=-32601)
        data = json.loads(encode(Response.failure(2, error)))

        assert data["id"] == 2
        assert data["error"] == {"kind": "MethodNotFound", "message": "Unknown tool: nope", "code": -32601}
        assert "result" not in data

    def test_encode_notification(self):
        """Test encoding a notification."""
        notification = Notification(method="log", params={"level": "info", "logger": "x", "data": "hi"})
        data = json.loads(encode(notification))

        assert data == {
            "jsonrpc": "2.0",
            "method": "log",
            "params": {"level": "info", "logger": "x", "data": "hi"},
        }
        assert "id" not in data

    def test_encode_model_result(self):
        """Test that pydantic results are dumped with wire aliases."""
        result = ReadResourceResult.text("document://readme", "body", mime_type="text/markdown")
        data = json.loads(encode(Response.success(1, result)))

        assert data["result"] == {
            "contents": [{"uri": "document://readme", "mimeType": "text/markdown", "text": "body"}]
        }

    def test_encoded_message_is_single_line(self):
        """Test that embedded newlines are escaped."""
        encoded = encode(Response.success(1, "line one\nline two"))

        assert b"\n" not in encoded
        assert json.loads(encoded)["result"] == "line one\nline two"

    def test_encode_request(self):
        """Test encoding a request (used by clients and tests)."""
        data = json.loads(encode(Request(id=4, method="ping")))

        assert data == {"jsonrpc": "2.0", "id": 4, "method": "ping", "params": {}}

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_numbers_rejected(self, value):
        """Test that values with no strict JSON spelling are not written."""
        with pytest.raises(ValueError):
            encode(Response.success(1, {"value": value}))

    def test_circular_result_rejected(self):
        """Test that a self-referencing result raises one of the encode errors."""
        result: dict = {}
        result["self"] = result

        with pytest.raises(ENCODE_ERRORS):
            encode(Response.success(1, result))


class TestRoundTrip:
    """Tests for decoding a request line and encoding it again."""

    @pytest.mark.parametrize(
        "line",
        [
            b'{"jsonrpc":"2.0","id":1,"method":"tool/add","params":{"a":2,"b":3}}',
            b'{"jsonrpc":"2.0","id":"req-7","method":"ping"}',
            b'{"id":0,"method":"tools/call","params":{"name":"sort","arguments":{"values":[3,1.5,"x"],"opts":{"reverse":true,"key":null}}}}',
            b'{"jsonrpc":"2.0","id":"\\u00e9t\\u00e9","method":"prompt/summarize","params":{"text":"line\\none"}}',
        ],
    )
    def test_request_survives_round_trip(self, line):
        """Test that id, method and params are preserved."""
        original = json.loads(line)

        data = json.loads(encode(decode(line)))

        assert data["jsonrpc"] == "2.0"
        assert data["id"] == original["id"]
        assert data["method"] == original["method"]
        assert data["params"] == original.get("params", {})

    def test_notification_round_trip_has_no_id(self):
        """Test that a client notification stays id-less."""
        data = json.loads(encode(decode(b'{"jsonrpc":"2.0","method":"notifications/initialized"}')))

        assert data == {"jsonrpc": "2.0", "method": "notifications/initialized", "params": {}}
