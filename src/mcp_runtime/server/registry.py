"""Capability registry for the MCP runtime.

This module provides the CapabilityRegistry class, which maps tool names,
prompt names, and resource URI templates to registered handlers.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..models.descriptor import CapabilityKind, HandlerDescriptor
from ..protocol.errors import DuplicateCapability, RegistryFrozenError
from ..utils.logging import get_logger
from .uri_template import UriTemplate
from .validation import ParamsValidator

logger = get_logger(__name__)

HandlerCallback = Callable[..., Any]


@dataclass(frozen=True)
class RegisteredHandler:
    """A descriptor together with its callback and compiled validator."""

    descriptor: HandlerDescriptor
    callback: HandlerCallback
    validator: ParamsValidator = field(repr=False)
    template: Optional[UriTemplate] = None


class CapabilityRegistry:
    """Registry of tools, resources, and prompts.

    Registration is append-only and happens before the server starts;
    the server freezes the registry when its read loop begins.
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._handlers: Dict[tuple[CapabilityKind, str], RegisteredHandler] = {}
        self._templates: List[RegisteredHandler] = []
        self._frozen = False

    def register(self, descriptor: HandlerDescriptor, callback: HandlerCallback) -> RegisteredHandler:
        """Register a capability.

        Args:
            descriptor: Capability metadata
            callback: Function (or coroutine function) invoked with validated params

        Returns:
            The registered handler entry

        Raises:
            DuplicateCapability: If the kind and name (or, for resources, the
                template shape) is already registered
            RegistryFrozenError: If the server has already started
            ValueError: If a resource URI template is malformed
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register {descriptor.kind.value} '{descriptor.name}' after startup"
            )
        if not callable(callback):
            raise ValueError(f"Callback for '{descriptor.name}' is not callable")

        key = (descriptor.kind, descriptor.name)
        if key in self._handlers:
            raise DuplicateCapability(
                f"{descriptor.kind.value.title()} '{descriptor.name}' is already registered"
            )

        template = None
        if descriptor.kind == CapabilityKind.RESOURCE:
            template = UriTemplate(descriptor.name)
            for existing in self._templates:
                if existing.template.shape == template.shape:
                    raise DuplicateCapability(
                        f"Resource template '{descriptor.name}' matches the same URIs "
                        f"as '{existing.descriptor.name}'"
                    )

        entry = RegisteredHandler(
            descriptor=descriptor,
            callback=callback,
            validator=ParamsValidator(descriptor),
            template=template,
        )
        self._handlers[key] = entry
        if template is not None:
            self._templates.append(entry)

        logger.debug(f"Registered {descriptor.kind.value} '{descriptor.name}'")
        return entry

    def lookup(self, kind: CapabilityKind, name: str) -> Optional[RegisteredHandler]:
        """Get a handler by kind and name.

        For resources the name is the URI template itself; use
        ``match_uri`` to resolve a concrete URI.

        Args:
            kind: Capability kind
            name: Capability name

        Returns:
            Registered handler or None if not found
        """
        return self._handlers.get((kind, name))

    def match_uri(self, uri: str) -> Optional[tuple[RegisteredHandler, dict[str, str]]]:
        """Resolve a concrete resource URI.

        When several templates match, the one with the most literal segments
        wins; among equally specific templates, the first registered wins.

        Args:
            uri: Concrete URI, e.g. "document://readme"

        Returns:
            Tuple of (handler, bound params) or None if nothing matches
        """
        best: Optional[tuple[RegisteredHandler, dict[str, str]]] = None
        for entry in self._templates:
            bound = entry.template.match(uri)
            if bound is None:
                continue
            if best is None or entry.template.literal_count > best[0].template.literal_count:
                best = (entry, bound)
        return best

    def has(self, kind: CapabilityKind, name: str) -> bool:
        """Check if a capability is registered.

        Returns:
            True if it exists, False otherwise
        """
        return (kind, name) in self._handlers

    def list_descriptors(self, kind: Optional[CapabilityKind] = None) -> List[HandlerDescriptor]:
        """List registered descriptors in registration order.

        Args:
            kind: Only list this kind (default: all kinds)

        Returns:
            List of descriptors
        """
        return [
            entry.descriptor
            for entry in self._handlers.values()
            if kind is None or entry.descriptor.kind == kind
        ]

    def freeze(self) -> None:
        """Reject further registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._handlers)
