"""Schema-driven parameter validation.

Each descriptor's parameter list is compiled once into a pydantic model.
Validation runs in pydantic's lax mode, so declared primitive types accept
their usual JSON spellings (``"3"`` for an integer, ``"true"`` for a boolean)
while unknown parameters are rejected. Model fields are positional
(``p0``, ``p1``, ...) aliased to the declared names, so parameters may use
names pydantic reserves for itself such as ``schema`` or ``_private``.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, create_model

from ..models.descriptor import HandlerDescriptor, ParamSpec, ParamType
from ..protocol.errors import InvalidParams

_PRIMITIVES: dict[str, Any] = {
    "string": str,
    "number": float,
    "integer": int,
    "boolean": bool,
    "object": dict[str, Any],
    "any": Any,
}


def _python_type(param_type: ParamType, items: Optional[ParamType] = None) -> Any:
    """Map a declared parameter type to a Python annotation."""
    if param_type == "array":
        return list[_PRIMITIVES[items or "any"]]
    return _PRIMITIVES[param_type]


def _field_for(spec: ParamSpec) -> tuple[Any, Any]:
    annotation = _python_type(spec.type, spec.items)
    if spec.required:
        return annotation, Field(..., alias=spec.name, description=spec.description)
    return Optional[annotation], Field(default=None, alias=spec.name, description=spec.description)


class ParamsValidator:
    """Validates and coerces request params for one descriptor.

    Args:
        descriptor: Descriptor whose parameter list is compiled
    """

    def __init__(self, descriptor: HandlerDescriptor) -> None:
        self.descriptor = descriptor
        fields = {f"p{i}": _field_for(spec) for i, spec in enumerate(descriptor.params)}
        self.model: type[BaseModel] = create_model(
            f"{descriptor.kind.value.title()}Params",
            __config__=ConfigDict(extra="forbid"),
            **fields,
        )

    def validate(self, params: dict[str, Any]) -> dict[str, Any]:
        """Validate params against the schema.

        Args:
            params: Raw params from the request

        Returns:
            Coerced params; optional parameters not supplied are None

        Raises:
            InvalidParams: If a required parameter is missing, a value has
                the wrong type, or an unknown parameter is supplied
        """
        try:
            validated = self.model.model_validate(params)
        except ValidationError as e:
            raise InvalidParams(_describe(e)) from e
        return validated.model_dump(by_alias=True)


def _describe(error: ValidationError) -> str:
    """Summarize a validation error, naming each offending field."""
    parts = []
    for item in error.errors():
        field = ".".join(str(loc) for loc in item["loc"]) or "params"
        if item["type"] == "missing":
            parts.append(f"Missing required parameter '{field}'")
        elif item["type"] == "extra_forbidden":
            parts.append(f"Unknown parameter '{field}'")
        else:
            parts.append(f"Invalid parameter '{field}': {item['msg']}")
    return "; ".join(parts)
