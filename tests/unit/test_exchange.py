"""Unit tests for the per-request Exchange."""

import pytest

from mcp_runtime.protocol.errors import ExchangeClosedError
from mcp_runtime.server.exchange import Exchange, level_rank


class TestLevelRank:
    """Tests for log level ordering."""

    def test_order(self):
        """Test that levels rank from debug to emergency."""
        assert level_rank("debug") < level_rank("info") < level_rank("warning") < level_rank("emergency")

    def test_case_insensitive(self):
        """Test that level names are case-insensitive."""
        assert level_rank("WARNING") == level_rank("warning")

    def test_unknown(self):
        """Test that an unknown level is rejected."""
        with pytest.raises(ValueError, match="Unknown log level"):
            level_rank("verbose")


class TestExchange:
    """Tests for Exchange notifications."""

    @pytest.mark.asyncio
    async def test_log(self, sink):
        """Test sending a log notification."""
        exchange = Exchange(1, sink)

        sent = await exchange.log("info", "DemoTools", "hello")

        assert sent is True
        assert exchange.sent == 1
        notification = sink.notifications[0]
        assert notification.method == "log"
        assert notification.params == {"level": "info", "logger": "DemoTools", "data": "hello"}

    @pytest.mark.asyncio
    async def test_log_below_min_level_is_filtered(self, sink):
        """Test that levels below the client's threshold are dropped."""
        exchange = Exchange(1, sink, min_level="warning")

        assert await exchange.log("info", "src", "quiet") is False
        assert await exchange.log("error", "src", "loud") is True
        assert [n.params["data"] for n in sink.notifications] == ["loud"]

    @pytest.mark.asyncio
    async def test_log_unknown_level(self, sink):
        """Test that an unknown level is rejected without sending."""
        exchange = Exchange(1, sink)

        with pytest.raises(ValueError):
            await exchange.log("verbose", "src", "x")
        assert sink.notifications == []

    @pytest.mark.asyncio
    async def test_progress_with_client_token(self, sink):
        """Test that progress uses the client-supplied token."""
        exchange = Exchange(1, sink, progress_token="tok-1")

        await exchange.progress(1, 4, "step 1")

        assert sink.notifications[0].method == "progress"
        assert sink.notifications[0].params == {
            "progressToken": "tok-1",
            "progress": 1,
            "total": 4,
            "message": "step 1",
        }

    @pytest.mark.asyncio
    async def test_progress_default_token(self, sink):
        """Test that a token is derived from the request id when none was supplied."""
        exchange = Exchange(9, sink)

        await exchange.progress(0.5)

        assert sink.notifications[0].params == {"progressToken": "request-9", "progress": 0.5}

    @pytest.mark.asyncio
    async def test_progress_explicit_token(self, sink):
        """Test that an explicit token overrides the client token."""
        exchange = Exchange(1, sink, progress_token="client")

        await exchange.progress(1, token="mine")

        assert sink.notifications[0].params["progressToken"] == "mine"

    @pytest.mark.asyncio
    async def test_closed_exchange(self, sink):
        """Test that a closed exchange refuses to send."""
        exchange = Exchange(5, sink)
        exchange.close()

        assert exchange.closed
        with pytest.raises(ExchangeClosedError, match="closed"):
            await exchange.log("info", "src", "late")
        with pytest.raises(ExchangeClosedError):
            await exchange.progress(1)
        assert sink.notifications == []
