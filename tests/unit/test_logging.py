"""Unit tests for logging configuration."""

import json
import logging
import sys

import pytest

from mcp_runtime.utils.logging import StructuredFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    """Restore the root logger's handlers and level after a test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("mcp_runtime.test", logging.WARNING, __file__, 10, "Request %s failed", (7,), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    """Tests for StructuredFormatter."""

    def test_json_lifts_request_fields(self):
        """Test that request id and method become top-level fields and other context is kept."""
        output = StructuredFormatter("json").format(
            _record(context={"request_id": 7, "method": "tool/add", "attempt": 2})
        )
        entry = json.loads(output)

        assert entry["level"] == "WARNING"
        assert entry["message"] == "Request 7 failed"
        assert entry["logger"] == "mcp_runtime.test"
        assert entry["request_id"] == 7
        assert entry["method"] == "tool/add"
        assert entry["fields"] == {"attempt": 2}

    def test_json_omits_absent_fields(self):
        """Test that records outside a request carry no request fields."""
        entry = json.loads(StructuredFormatter("json").format(_record()))

        assert "request_id" not in entry
        assert "method" not in entry
        assert "exception" not in entry

    def test_text_format(self):
        """Test the single-line text format."""
        output = StructuredFormatter("text").format(_record())

        assert output.endswith("[WARNING] mcp_runtime.test: Request 7 failed")

    def test_text_format_tags_request(self):
        """Test that the text line ends with the request tag."""
        output = StructuredFormatter("text").format(_record(context={"request_id": "abc", "method": "ping"}))

        assert output.endswith("Request 7 failed [request=abc method=ping]")

    def test_exception_is_appended(self):
        """Test that a traceback follows the text line."""
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()

        lines = StructuredFormatter("text").format(record).splitlines()

        assert lines[0].endswith("Request 7 failed")
        assert lines[-1] == "RuntimeError: boom"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_handler_uses_stderr(self, restore_root_logger):
        """Test that console output never goes to stdout."""
        setup_logging(level="debug", format_type="json")

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert restore_root_logger.handlers[0].stream is sys.stderr

    def test_log_file(self, restore_root_logger, tmp_path):
        """Test the optional file handler."""
        log_file = tmp_path / "server.log"
        setup_logging(level="INFO", log_file=str(log_file))

        logging.getLogger("mcp_runtime.test").info("hello file")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert "hello file" in log_file.read_text()
        restore_root_logger.handlers[-1].close()
