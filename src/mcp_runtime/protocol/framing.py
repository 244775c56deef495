"""Newline-delimited message framing over a byte stream pair.

The framer reads one UTF-8 line per message from an ``asyncio.StreamReader``
and writes one line per message to a binary sink. Writes are serialized so
that notifications emitted by a handler never interleave with a response.
"""

import asyncio
import sys
from typing import BinaryIO, Optional

from ..utils.logging import get_logger
from .errors import FramingError

logger = get_logger(__name__)

DEFAULT_MAX_LINE_BYTES = 4 * 1024 * 1024
DELIMITER = b"\n"


class LineFramer:
    """Reads and writes newline-delimited messages.

    Args:
        reader: Source of incoming bytes
        writer: Binary sink for outgoing bytes (e.g. ``sys.stdout.buffer``)
        max_line_bytes: Longest accepted input line
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: BinaryIO,
        max_line_bytes: int = DEFAULT_MAX_LINE_BYTES,
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.max_line_bytes = max_line_bytes
        self._write_lock = asyncio.Lock()
        self.messages_read = 0
        self.messages_written = 0

    async def read_message(self) -> Optional[bytes]:
        """Read the next message.

        Returns:
            Message bytes without the delimiter, or None at end of stream

        Raises:
            FramingError: If the stream ends mid-message or a line is too long
        """
        try:
            line = await self.reader.readuntil(DELIMITER)
        except asyncio.IncompleteReadError as e:
            if not e.partial:
                return None
            raise FramingError(
                f"Stream closed mid-message ({len(e.partial)} bytes without trailing newline)"
            ) from e
        except asyncio.LimitOverrunError as e:
            raise FramingError(f"Message exceeds reader buffer limit: {e}") from e

        if len(line) > self.max_line_bytes:
            raise FramingError(
                f"Message of {len(line)} bytes exceeds limit of {self.max_line_bytes} bytes"
            )

        self.messages_read += 1
        return line[: -len(DELIMITER)]

    async def write_message(self, data: bytes) -> None:
        """Write one message followed by the delimiter.

        Args:
            data: Encoded message (must not contain a newline)

        Raises:
            FramingError: If the payload contains the delimiter or the sink is closed
        """
        if DELIMITER in data:
            raise FramingError("Outgoing message contains a newline")

        async with self._write_lock:
            try:
                self.writer.write(data + DELIMITER)
                self.writer.flush()
            except (BrokenPipeError, ValueError) as e:
                raise FramingError(f"Output stream closed: {e}") from e
            self.messages_written += 1


async def open_stdio_framer(max_line_bytes: int = DEFAULT_MAX_LINE_BYTES) -> LineFramer:
    """Create a framer bound to the process's stdin and stdout.

    Args:
        max_line_bytes: Longest accepted input line

    Returns:
        LineFramer reading stdin and writing stdout
    """
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader(limit=max_line_bytes + 1)
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin)
    logger.debug("Connected stdio framer")
    return LineFramer(reader, sys.stdout.buffer, max_line_bytes=max_line_bytes)
