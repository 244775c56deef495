"""Server runtime: registry, dispatcher, exchange, and lifecycle."""

from .dispatcher import Dispatcher
from .exchange import Exchange, level_rank
from .registry import CapabilityRegistry, RegisteredHandler
from .runtime import EXIT_FRAMING_ERROR, EXIT_OK, EXIT_STARTUP_ERROR, McpServer, run_stdio
from .uri_template import UriTemplate
from .validation import ParamsValidator

__all__ = [
    "CapabilityRegistry",
    "RegisteredHandler",
    "UriTemplate",
    "ParamsValidator",
    "Dispatcher",
    "Exchange",
    "level_rank",
    "McpServer",
    "run_stdio",
    "EXIT_OK",
    "EXIT_FRAMING_ERROR",
    "EXIT_STARTUP_ERROR",
]
