"""Per-request exchange handle.

An Exchange lets a running handler push log and progress notifications to
the client before its response is written. The dispatcher closes the
exchange as soon as the handler returns; later use raises
``ExchangeClosedError``.
"""

from typing import Any, Awaitable, Callable, Optional

from ..models.messages import LOG_LEVELS, Notification, RequestId
from ..protocol.errors import ExchangeClosedError

NotificationSink = Callable[[Notification], Awaitable[None]]


def level_rank(level: str) -> int:
    """Return the severity rank of a log level name.

    Raises:
        ValueError: If the level is unknown
    """
    try:
        return LOG_LEVELS.index(level.lower())
    except ValueError:
        raise ValueError(
            f"Unknown log level: {level!r}. Use one of: {', '.join(LOG_LEVELS)}"
        ) from None


class Exchange:
    """Notification handle scoped to one handler invocation.

    Args:
        request_id: Id of the request being handled
        sink: Coroutine that writes a notification to the output stream
        progress_token: Token the client supplied in ``_meta.progressToken``
        min_level: Least severe log level delivered to the client
    """

    def __init__(
        self,
        request_id: Optional[RequestId],
        sink: NotificationSink,
        progress_token: Optional[str | int] = None,
        min_level: str = "debug",
    ) -> None:
        self.request_id = request_id
        self.progress_token = progress_token
        self._sink: Optional[NotificationSink] = sink
        self._min_rank = level_rank(min_level)
        self.sent = 0

    @property
    def closed(self) -> bool:
        return self._sink is None

    def close(self) -> None:
        """Revoke the handle; called when the handler returns."""
        self._sink = None

    def _check_open(self, method: str) -> NotificationSink:
        if self._sink is None:
            raise ExchangeClosedError(
                f"Exchange for request {self.request_id!r} is closed; "
                f"cannot send '{method}' after the handler returned"
            )
        return self._sink

    async def _emit(self, notification: Notification) -> None:
        sink = self._check_open(notification.method)
        await sink(notification)
        self.sent += 1

    async def log(self, level: str, source: str, message: Any) -> bool:
        """Send a log notification.

        Args:
            level: RFC 5424 level name (debug ... emergency)
            source: Logger name shown to the client
            message: Log payload (usually a string)

        Returns:
            True if sent, False if filtered by the client's log level

        Raises:
            ExchangeClosedError: If the handler has already returned
            ValueError: If the level is unknown
        """
        self._check_open("log")
        rank = level_rank(level)
        if rank < self._min_rank:
            return False
        await self._emit(
            Notification(
                method="log",
                params={"level": LOG_LEVELS[rank], "logger": source, "data": message},
            )
        )
        return True

    async def progress(
        self,
        current: float,
        total: Optional[float] = None,
        message: Optional[str] = None,
        token: Optional[str | int] = None,
    ) -> None:
        """Send a progress notification.

        Args:
            current: Progress so far
            total: Expected total, if known
            message: Human-readable status
            token: Progress token (default: the client-supplied token, or
                one derived from the request id)

        Raises:
            ExchangeClosedError: If the handler has already returned
        """
        if token is None:
            token = self.progress_token if self.progress_token is not None else f"request-{self.request_id}"

        params: dict[str, Any] = {"progressToken": token, "progress": current}
        if total is not None:
            params["total"] = total
        if message is not None:
            params["message"] = message
        await self._emit(Notification(method="progress", params=params))
