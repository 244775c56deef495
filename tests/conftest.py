"""Test configuration and fixtures for the MCP runtime tests.

This module provides shared fixtures and configuration for all tests.
"""

import asyncio
import io
import json
import random
from typing import Any, Callable

import pytest

from mcp_runtime.demo import register_demo_capabilities
from mcp_runtime.models import Notification
from mcp_runtime.protocol.framing import DEFAULT_MAX_LINE_BYTES, LineFramer
from mcp_runtime.server.registry import CapabilityRegistry


class CollectingSink:
    """Notification sink that records everything it is sent."""

    def __init__(self):
        self.notifications: list[Notification] = []

    async def __call__(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def of(self, method: str) -> list[Notification]:
        return [n for n in self.notifications if n.method == method]


@pytest.fixture
def sink() -> CollectingSink:
    """Sink collecting notifications emitted during dispatch."""
    return CollectingSink()


@pytest.fixture
def registry() -> CapabilityRegistry:
    """Empty capability registry."""
    return CapabilityRegistry()


@pytest.fixture
def demo_registry() -> CapabilityRegistry:
    """Registry holding the full demo capability set with a seeded RNG."""
    return register_demo_capabilities(rng=random.Random(42))


@pytest.fixture
def make_framer() -> Callable[..., tuple[LineFramer, io.BytesIO]]:
    """Factory for framers over in-memory streams.

    Must be called from inside a running event loop. Unless ``eof`` is False
    the returned reader has already seen end of stream, so the framer yields
    ``data`` and then EOF; otherwise it waits for more input after ``data``.
    """

    def factory(data: bytes = b"", max_line_bytes: int = DEFAULT_MAX_LINE_BYTES, eof: bool = True):
        reader = asyncio.StreamReader(limit=max_line_bytes + 1)
        reader.feed_data(data)
        if eof:
            reader.feed_eof()
        output = io.BytesIO()
        return LineFramer(reader, output, max_line_bytes=max_line_bytes), output

    return factory


def request_line(request_id: Any, method: str, params: dict[str, Any] | None = None) -> bytes:
    """Encode one request as a newline-terminated JSON line."""
    message: dict[str, Any] = {"jsonrpc": "2.0", "method": method}
    if request_id is not None:
        message["id"] = request_id
    if params is not None:
        message["params"] = params
    return json.dumps(message).encode("utf-8") + b"\n"


def read_output(output: io.BytesIO) -> list[dict[str, Any]]:
    """Parse every line written to an in-memory framer sink."""
    return [json.loads(line) for line in output.getvalue().splitlines()]


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (full server loop)"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests (no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (real sleeps in demo handlers)"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test location."""
    for item in items:
        # Mark integration tests
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        # Mark unit tests
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
