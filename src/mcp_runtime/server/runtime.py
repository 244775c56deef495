"""Server lifecycle for the MCP runtime.

The server owns the framer, registry, and dispatcher and runs the
read-dispatch-write loop until the input stream closes.
"""

import asyncio
from typing import Optional

from ..config.schemas import ServerConfig
from ..models.messages import Notification, Response
from ..protocol.codec import ENCODE_ERRORS, decode, encode
from ..protocol.errors import FramingError, HandlerFailure, MalformedMessage
from ..protocol.framing import LineFramer, open_stdio_framer
from ..utils.logging import get_logger
from .dispatcher import Dispatcher
from .registry import CapabilityRegistry

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FRAMING_ERROR = 1
EXIT_STARTUP_ERROR = 2


class McpServer:
    """Stdio MCP server.

    By default requests are handled one at a time in arrival order. With
    ``config.concurrent`` each request runs as its own task (up to
    ``config.max_concurrency`` at once); responses may then be written in a
    different order than requests arrived, and clients must correlate by id.
    A handler's own notifications always precede its response.

    Args:
        registry: Registered capabilities (frozen when the loop starts)
        config: Server configuration
        framer: Message framer (default: stdin/stdout)
    """

    def __init__(
        self,
        registry: CapabilityRegistry,
        config: Optional[ServerConfig] = None,
        framer: Optional[LineFramer] = None,
    ) -> None:
        self.registry = registry
        self.config = config or ServerConfig()
        self.framer = framer
        self.dispatcher = Dispatcher(registry, self.send, self.config)
        self._tasks: set[asyncio.Task] = set()
        self._fatal: Optional[FramingError] = None
        self._output_failed = asyncio.Event()

    async def send(self, message: Response | Notification) -> None:
        """Encode and write one message.

        Raises:
            RuntimeError: If the server has no framer yet
            FramingError: If the output stream is closed
        """
        if self.framer is None:
            raise RuntimeError("Server is not running")
        await self.framer.write_message(self._encode(message))

    def _encode(self, message: Response | Notification) -> bytes:
        """Encode a message, answering with a HandlerFailure when a result has no JSON form."""
        try:
            return encode(message)
        except ENCODE_ERRORS as e:
            if not isinstance(message, Response) or message.error is not None:
                raise
            logger.error(
                f"Result could not be encoded: {type(e).__name__}: {e}",
                extra={"context": {"request_id": message.id}},
            )
            failure = HandlerFailure(f"Result could not be encoded as JSON: {type(e).__name__}: {e}")
            return encode(Response.failure(message.id, failure.to_error_object()))

    async def run(self) -> int:
        """Run the read loop until end of input.

        Returns:
            Process exit code: 0 on clean end of stream, 1 on a framing error
        """
        self.registry.freeze()
        if self.framer is None:
            self.framer = await open_stdio_framer(self.config.max_line_bytes)

        logger.info(
            f"Server '{self.config.name}' v{self.config.version} ready "
            f"with {len(self.registry)} capabilities"
            + (f" (concurrent, max {self.config.max_concurrency})" if self.config.concurrent else "")
        )

        semaphore = asyncio.Semaphore(self.config.max_concurrency)
        try:
            while self._fatal is None:
                data = await self._next_message()
                if data is None:
                    if self._fatal is None:
                        logger.info("End of input stream, shutting down")
                    break
                if not data.strip():
                    continue

                if self.config.concurrent:
                    await semaphore.acquire()
                    task = asyncio.create_task(self._process_guarded(data, semaphore))
                    self._tasks.add(task)
                    task.add_done_callback(self._tasks.discard)
                else:
                    await self._process(data)
        except FramingError as e:
            self._fatal = e
        finally:
            if self._tasks:
                logger.info(f"Waiting for {len(self._tasks)} in-flight request(s)")
                await asyncio.gather(*self._tasks, return_exceptions=True)

        if self._fatal is not None:
            logger.error(f"Connection terminated: {self._fatal.message}")
            return EXIT_FRAMING_ERROR
        return EXIT_OK

    async def _next_message(self) -> Optional[bytes]:
        """Read the next message, giving up early once the output has failed.

        Returns:
            Message bytes, or None at end of input or after an output failure
        """
        if not self.config.concurrent:
            return await self.framer.read_message()

        read = asyncio.ensure_future(self.framer.read_message())
        failed = asyncio.ensure_future(self._output_failed.wait())
        done, pending = await asyncio.wait({read, failed}, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        if read in done:
            return read.result()
        return None

    async def _process(self, data: bytes) -> None:
        """Decode, dispatch, and answer one message."""
        try:
            request = decode(data)
        except MalformedMessage as e:
            logger.warning(f"Skipping malformed message: {e.message}")
            await self.send(Response.failure(e.request_id, e.to_error_object()))
            return

        response = await self.dispatcher.handle(request)
        if response is not None:
            await self.send(response)

    async def _process_guarded(self, data: bytes, semaphore: asyncio.Semaphore) -> None:
        """Run ``_process`` as a task, recording output failures."""
        try:
            await self._process(data)
        except FramingError as e:
            if self._fatal is None:
                self._fatal = e
            self._output_failed.set()
        finally:
            semaphore.release()


def run_stdio(registry: CapabilityRegistry, config: Optional[ServerConfig] = None) -> int:
    """Serve the registry over stdin/stdout.

    Args:
        registry: Registered capabilities
        config: Server configuration

    Returns:
        Process exit code
    """
    server = McpServer(registry, config)
    return asyncio.run(server.run())
