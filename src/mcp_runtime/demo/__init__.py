"""Demo capability set served by ``mcp-runtime serve``.

Tools, resources, and prompts that exercise every feature of the runtime:
plain and structured results, URI templates, log and progress
notifications, and handler faults.
"""

import random
from typing import Optional

from ..config.schemas import ServerConfig
from ..server.registry import CapabilityRegistry
from .advanced import register_advanced_tools
from .calculator import register_calculator_tools
from .mock_data import MockDataTools, register_mock_data_tools
from .prompts import register_demo_prompts
from .resources import DEFAULT_DOCUMENTS, Document, DocumentStore, register_demo_resources
from .text import register_text_tools


def register_demo_capabilities(
    registry: Optional[CapabilityRegistry] = None,
    config: Optional[ServerConfig] = None,
    rng: Optional[random.Random] = None,
) -> CapabilityRegistry:
    """Register the full demo capability set.

    Args:
        registry: Target registry (default: a new one)
        config: Server configuration; its ``documents`` are added to the
            built-in demo documents
        rng: Random source for the mock data tools

    Returns:
        The populated registry

    Raises:
        DuplicateCapability: If the registry already holds a demo name
    """
    if registry is None:
        registry = CapabilityRegistry()

    store = DocumentStore()
    if config is not None:
        for doc_id, doc in config.documents.items():
            store.put(doc_id, Document(**doc.model_dump()))

    register_calculator_tools(registry)
    register_text_tools(registry)
    register_mock_data_tools(registry, rng)
    register_advanced_tools(registry)
    register_demo_resources(registry, store)
    register_demo_prompts(registry)
    return registry


__all__ = [
    "register_demo_capabilities",
    "DocumentStore",
    "Document",
    "DEFAULT_DOCUMENTS",
    "MockDataTools",
]
