"""Capability descriptor models.

A descriptor is the registered metadata of a tool, resource, or prompt:
its name (or URI template), description, and parameter schema.
"""

import re
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


ParamType = Literal["string", "number", "integer", "boolean", "array", "object", "any"]

PLACEHOLDER_PATTERN = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


class CapabilityKind(str, Enum):
    """Capability kind enumeration."""

    TOOL = "tool"
    RESOURCE = "resource"
    PROMPT = "prompt"


class ParamSpec(BaseModel):
    """One declared handler parameter.

    Attributes:
        name: Parameter name
        type: Declared primitive type
        required: Whether the parameter must be supplied
        description: Parameter description
        items: Element type for array parameters
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., pattern=r"^[A-Za-z_][A-Za-z0-9_]*$", description="Parameter name")
    type: ParamType = Field(default="string", description="Declared type")
    required: bool = Field(default=True, description="Whether the parameter is required")
    description: str = Field(default="", description="Parameter description")
    items: Optional[ParamType] = Field(None, description="Element type for arrays")

    def to_json_schema(self) -> dict[str, Any]:
        """Render as a JSON Schema property.

        Returns:
            JSON Schema fragment for this parameter
        """
        schema: dict[str, Any] = {}
        if self.type != "any":
            schema["type"] = self.type
        if self.description:
            schema["description"] = self.description
        if self.type == "array" and self.items and self.items != "any":
            schema["items"] = {"type": self.items}
        return schema


class HandlerDescriptor(BaseModel):
    """Registered metadata for a capability.

    Attributes:
        kind: Tool, resource, or prompt
        name: Tool/prompt name, or the resource URI template
        title: Optional display name
        description: Capability description
        params: Ordered parameter schema
        mime_type: Content type of a resource
        wants_exchange: Whether the callback takes an ``exchange`` argument
    """

    model_config = ConfigDict(frozen=True)

    kind: CapabilityKind
    name: str = Field(..., min_length=1)
    title: Optional[str] = None
    description: str = ""
    params: tuple[ParamSpec, ...] = ()
    mime_type: Optional[str] = None
    wants_exchange: bool = False

    @field_validator("params")
    @classmethod
    def validate_unique_params(cls, v: tuple[ParamSpec, ...]) -> tuple[ParamSpec, ...]:
        """Reject repeated parameter names."""
        names = [p.name for p in v]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise ValueError(f"Duplicate parameter names: {', '.join(sorted(duplicates))}")
        return v

    @classmethod
    def tool(
        cls,
        name: str,
        description: str,
        params: list[ParamSpec] | None = None,
        wants_exchange: bool = False,
    ) -> "HandlerDescriptor":
        """Describe a tool."""
        return cls(
            kind=CapabilityKind.TOOL,
            name=name,
            description=description,
            params=tuple(params or ()),
            wants_exchange=wants_exchange,
        )

    @classmethod
    def prompt(
        cls,
        name: str,
        description: str,
        params: list[ParamSpec] | None = None,
    ) -> "HandlerDescriptor":
        """Describe a prompt."""
        return cls(
            kind=CapabilityKind.PROMPT,
            name=name,
            description=description,
            params=tuple(params or ()),
        )

    @classmethod
    def resource(
        cls,
        uri_template: str,
        title: str,
        description: str,
        mime_type: str = "text/plain",
        wants_exchange: bool = False,
    ) -> "HandlerDescriptor":
        """Describe a resource.

        Parameters are derived from the template placeholders; each is a
        required string.

        Args:
            uri_template: URI template, e.g. "document://{id}"
            title: Display name
            description: Resource description
            mime_type: Default content type
            wants_exchange: Whether the callback takes an ``exchange`` argument

        Returns:
            Resource descriptor
        """
        params = tuple(
            ParamSpec(name=name, type="string", description=f"URI segment '{name}'")
            for name in PLACEHOLDER_PATTERN.findall(uri_template)
        )
        return cls(
            kind=CapabilityKind.RESOURCE,
            name=uri_template,
            title=title,
            description=description,
            params=params,
            mime_type=mime_type,
            wants_exchange=wants_exchange,
        )

    @property
    def is_template(self) -> bool:
        """Check if this is a resource with placeholders.

        Returns:
            True for templated resources
        """
        return self.kind == CapabilityKind.RESOURCE and bool(self.params)

    def input_schema(self) -> dict[str, Any]:
        """Render the parameter list as a JSON Schema object.

        Returns:
            JSON Schema with properties and required list
        """
        return {
            "type": "object",
            "properties": {p.name: p.to_json_schema() for p in self.params},
            "required": [p.name for p in self.params if p.required],
        }

    def to_listing(self) -> dict[str, Any]:
        """Export for client discovery.

        Returns:
            Dictionary describing the capability
        """
        listing: dict[str, Any] = {
            "kind": self.kind.value,
            "name": self.name,
            "description": self.description,
            "params": [p.model_dump(exclude_none=True) for p in self.params],
            "inputSchema": self.input_schema(),
        }
        if self.title:
            listing["title"] = self.title
        if self.mime_type:
            listing["mimeType"] = self.mime_type
        return listing
