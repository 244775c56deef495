"""Demo resources: a document store plus status, timestamp, and echo URIs."""

import json
import platform
from datetime import datetime
from typing import Dict, List, Optional

import psutil
from pydantic import BaseModel

from ..models import HandlerDescriptor, ReadResourceResult
from ..server.exchange import Exchange
from ..server.registry import CapabilityRegistry

MB = 1024 * 1024


class Document(BaseModel):
    """A stored document."""

    title: str
    mime_type: str = "text/plain"
    content: str


DEFAULT_DOCUMENTS: Dict[str, Document] = {
    "readme": Document(
        title="README",
        mime_type="text/plain",
        content=(
            "Welcome to the MCP Demo Server!\n\n"
            "This server demonstrates the Model Context Protocol features:\n"
            "- Tools: Functions the AI can call\n"
            "- Resources: Data the AI can read\n"
            "- Prompts: Pre-defined prompt templates\n\n"
            "Try asking the AI to use these features!\n"
        ),
    ),
    "config": Document(
        title="Configuration",
        mime_type="application/json",
        content=json.dumps(
            {
                "server": {
                    "name": "mcp-demo-server",
                    "version": "1.0.0",
                    "features": ["tools", "resources", "prompts"],
                },
                "settings": {"debug": False, "maxConnections": 10},
            },
            indent=2,
        ),
    ),
    "guide": Document(
        title="User Guide",
        mime_type="text/markdown",
        content=(
            "# MCP Demo User Guide\n\n"
            "## Available Tools\n"
            "- `add`, `subtract`, `multiply`, `divide` - Calculator operations\n"
            "- `format_text`, `count_words` - Text tools\n"
            "- `get_weather` - Mock weather data\n"
            "- `roll_dice` - Dice rolling simulation\n"
            "- `get_current_time` - Current time in any timezone\n"
            "- `generate_uuid`, `sort_numbers` - Utilities\n"
            "- `demo_logging`, `demo_progress`, `demo_error_handling` - Notification demos\n\n"
            "## Available Resources\n"
            "- `document://{id}` - Access stored documents\n"
            "- `status://server` - Server status information\n"
            "- `timestamp://now` - Current timestamp\n"
            "- `echo://{message}` - Echo a message back\n\n"
            "## Available Prompts\n"
            "- `code_review` - Code review prompt template\n"
            "- `explain_concept` - Concept explanation template\n"
            "- `debug_helper` - Debugging assistance template\n"
            "- `pair_programming` - Pair programming session\n"
            "- `commit_message` - Conventional commit message\n"
        ),
    ),
}


class DocumentStore:
    """In-memory documents keyed by lowercase id.

    Args:
        documents: Initial documents (default: the built-in demo documents)
    """

    def __init__(self, documents: Optional[Dict[str, Document]] = None) -> None:
        source = DEFAULT_DOCUMENTS if documents is None else documents
        self._documents: Dict[str, Document] = {k.lower(): v for k, v in source.items()}

    def get(self, doc_id: str) -> Optional[Document]:
        return self._documents.get(doc_id.lower())

    def put(self, doc_id: str, document: Document) -> None:
        self._documents[doc_id.lower()] = document

    def ids(self) -> List[str]:
        return list(self._documents)

    def __len__(self) -> int:
        return len(self._documents)


class DemoResources:
    """Resource handlers bound to a document store.

    Args:
        store: Document store read by ``document://{id}``
    """

    def __init__(self, store: DocumentStore) -> None:
        self.store = store
        self.started_at = datetime.now()

    def get_document(self, id: str) -> ReadResourceResult:
        uri = f"document://{id}"
        doc = self.store.get(id)
        if doc is None:
            return ReadResourceResult.text(
                uri,
                f"Document not found. Available documents: {', '.join(self.store.ids())}",
            )
        return ReadResourceResult.text(uri, doc.content, mime_type=doc.mime_type)

    def get_server_status(self) -> ReadResourceResult:
        process = psutil.Process()
        memory = psutil.virtual_memory()
        uptime = datetime.now() - self.started_at
        status = (
            "Server Status Report\n"
            "====================\n"
            "Status: Running\n"
            f"Started: {self.started_at.isoformat(timespec='seconds')}\n"
            f"Uptime: {int(uptime.total_seconds())}s\n"
            f"Document Count: {len(self.store)}\n"
            f"Available Documents: {', '.join(self.store.ids())}\n"
            f"Python Version: {platform.python_version()}\n"
            f"Memory Used: {process.memory_info().rss // MB} MB\n"
            f"Memory Free: {memory.available // MB} MB\n"
        )
        return ReadResourceResult.text("status://server", status)

    def get_current_timestamp(self) -> ReadResourceResult:
        now = datetime.now()
        content = json.dumps(
            {
                "iso": now.isoformat(),
                "date": now.date().isoformat(),
                "time": now.time().isoformat(),
                "epoch_millis": int(now.timestamp() * 1000),
                "day_of_week": now.strftime("%A").upper(),
                "day_of_year": now.timetuple().tm_yday,
            },
            indent=2,
        )
        return ReadResourceResult.text("timestamp://now", content, mime_type="application/json")

    async def echo_message(self, message: str, exchange: Exchange) -> ReadResourceResult:
        await exchange.log("info", "DemoResources", f"Echo resource accessed with message: {message}")
        content = (
            "Echo Response\n"
            "=============\n"
            f"Original: {message}\n"
            f"Reversed: {message[::-1]}\n"
            f"Length: {len(message)}\n"
            f"Uppercase: {message.upper()}\n"
        )
        return ReadResourceResult.text(f"echo://{message}", content)


def register_demo_resources(registry: CapabilityRegistry, store: Optional[DocumentStore] = None) -> DocumentStore:
    """Register the demo resources.

    Args:
        registry: Target registry
        store: Document store (default: the built-in demo documents)

    Returns:
        The document store the resources read from
    """
    if store is None:
        store = DocumentStore()
    resources = DemoResources(store)

    registry.register(
        HandlerDescriptor.resource(
            "document://{id}",
            "Document Store",
            f"Access stored documents by ID. Available IDs: {', '.join(store.ids())}",
        ),
        resources.get_document,
    )
    registry.register(
        HandlerDescriptor.resource(
            "status://server", "Server Status", "Get current server status and statistics"
        ),
        resources.get_server_status,
    )
    registry.register(
        HandlerDescriptor.resource(
            "timestamp://now",
            "Current Timestamp",
            "Get the current server timestamp in various formats",
            mime_type="application/json",
        ),
        resources.get_current_timestamp,
    )
    registry.register(
        HandlerDescriptor.resource(
            "echo://{message}",
            "Echo Resource",
            "Echoes back the provided message with metadata",
            wants_exchange=True,
        ),
        resources.echo_message,
    )
    return store
