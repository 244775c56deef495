"""Request dispatcher for the MCP runtime.

Routes each decoded request to a registered capability (or a protocol
method), validates its params, invokes the handler with a per-request
Exchange, and turns the outcome into a Response. Per-request errors never
escape ``handle``.
"""

import inspect
from typing import Any, Awaitable, Callable, Dict, Optional

from ..config.schemas import ServerConfig
from ..models.descriptor import CapabilityKind
from ..models.messages import Request, RequestId, Response
from ..models.result import HandlerResult
from ..protocol.errors import HandlerFailure, InvalidParams, McpRuntimeError, MethodNotFound
from ..utils.logging import get_logger
from .exchange import Exchange, NotificationSink, level_rank
from .registry import CapabilityRegistry, RegisteredHandler

logger = get_logger(__name__)

# Method prefixes for direct "<kind>/<name>" addressing
KIND_PREFIXES = {
    "tool": CapabilityKind.TOOL,
    "resource": CapabilityKind.RESOURCE,
    "prompt": CapabilityKind.PROMPT,
}

ProtocolMethod = Callable[[Request], Awaitable[Any]]


class Dispatcher:
    """Dispatches requests against a capability registry.

    Args:
        registry: Registered capabilities
        sink: Coroutine writing notifications to the output stream
        config: Server configuration (server info, initial notification level)
    """

    def __init__(
        self,
        registry: CapabilityRegistry,
        sink: NotificationSink,
        config: Optional[ServerConfig] = None,
    ) -> None:
        self.registry = registry
        self.sink = sink
        self.config = config or ServerConfig()
        self.notification_level = self.config.notification_level
        self.handled = 0
        self.failed = 0

        self._protocol_methods: Dict[str, ProtocolMethod] = {
            "initialize": self._initialize,
            "ping": self._ping,
            "logging/setLevel": self._set_level,
            "list_capabilities": self._list_capabilities,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
            "resources/list": self._list_resources,
            "resources/templates/list": self._list_resource_templates,
            "resources/read": self._read_resource,
            "prompts/list": self._list_prompts,
            "prompts/get": self._get_prompt,
        }

    async def handle(self, request: Request) -> Optional[Response]:
        """Handle one request.

        Args:
            request: Decoded request

        Returns:
            Response, or None for client notifications (no id)
        """
        if request.is_notification:
            await self._handle_notification(request)
            return None

        self.handled += 1
        try:
            result = await self._route(request)
        except McpRuntimeError as e:
            self.failed += 1
            logger.warning(
                f"Request {request.id!r} ({request.method}) failed: {e.kind}: {e.message}",
                extra={"context": {"request_id": request.id, "method": request.method}},
            )
            return Response.failure(request.id, e.to_error_object())

        return Response.success(request.id, result)

    async def _handle_notification(self, request: Request) -> None:
        """Process a client notification; nothing is written back."""
        if request.method.startswith("notifications/"):
            logger.debug(f"Client notification: {request.method}")
            return
        try:
            await self._route(request)
        except McpRuntimeError as e:
            logger.warning(f"Notification {request.method} failed: {e.kind}: {e.message}")

    async def _route(self, request: Request) -> Any:
        protocol_method = self._protocol_methods.get(request.method)
        if protocol_method is not None:
            return await protocol_method(request)

        prefix, sep, name = request.method.partition("/")
        kind = KIND_PREFIXES.get(prefix)
        if not sep or kind is None or not name:
            raise MethodNotFound(f"Method not found: {request.method}")

        return await self.invoke(kind, name, request.params, request.id)

    async def invoke(
        self,
        kind: CapabilityKind,
        name: str,
        params: dict[str, Any],
        request_id: Optional[RequestId] = None,
    ) -> Any:
        """Resolve, validate, and invoke a capability.

        Args:
            kind: Capability kind
            name: Tool/prompt name, or the concrete URI of a resource
            params: Raw params (may include ``_meta``)
            request_id: Id of the request being handled

        Returns:
            The handler's result value

        Raises:
            MethodNotFound: If no capability matches
            InvalidParams: If params fail schema validation
            HandlerFailure: If the handler raised or returned a fault
        """
        args = dict(params)
        meta = args.pop("_meta", None)
        progress_token = meta.get("progressToken") if isinstance(meta, dict) else None

        if kind == CapabilityKind.RESOURCE:
            match = self.registry.match_uri(name)
            if match is None:
                raise MethodNotFound(f"No resource matches URI: {name}")
            entry, bound = match
            args.update(bound)
        else:
            entry = self.registry.lookup(kind, name)
            if entry is None:
                raise MethodNotFound(f"Unknown {kind.value}: {name}")

        validated = entry.validator.validate(args)
        outcome = await self._call(entry, validated, request_id, progress_token)
        if not outcome.success:
            raise HandlerFailure(outcome.error or "Handler failed")
        return outcome.value

    async def _call(
        self,
        entry: RegisteredHandler,
        args: dict[str, Any],
        request_id: Optional[RequestId],
        progress_token: Optional[str | int],
    ) -> HandlerResult:
        """Invoke a handler, capturing any fault as a HandlerResult."""
        exchange = Exchange(
            request_id,
            self.sink,
            progress_token=progress_token,
            min_level=self.notification_level,
        )
        kwargs = dict(args)
        if entry.descriptor.wants_exchange:
            kwargs["exchange"] = exchange

        try:
            value = entry.callback(**kwargs)
            if inspect.isawaitable(value):
                value = await value
        except Exception as e:
            logger.error(
                f"Handler for {entry.descriptor.kind.value} '{entry.descriptor.name}' raised",
                exc_info=True,
                extra={"context": {"request_id": request_id, "handler": entry.descriptor.name}},
            )
            return HandlerResult.from_exception(e)
        finally:
            exchange.close()

        if isinstance(value, HandlerResult):
            return value
        return HandlerResult.ok(value)

    # Protocol methods

    async def _initialize(self, request: Request) -> dict[str, Any]:
        client_info = request.params.get("clientInfo")
        if isinstance(client_info, dict):
            logger.info(f"Client connected: {client_info.get('name')} {client_info.get('version', '')}".rstrip())

        result: dict[str, Any] = {
            "protocolVersion": self.config.protocol_version,
            "capabilities": {
                "tools": {"listChanged": False},
                "resources": {"subscribe": False, "listChanged": False},
                "prompts": {"listChanged": False},
                "logging": {},
            },
            "serverInfo": {"name": self.config.name, "version": self.config.version},
        }
        if self.config.instructions:
            result["instructions"] = self.config.instructions
        return result

    async def _ping(self, request: Request) -> dict[str, Any]:
        return {}

    async def _set_level(self, request: Request) -> dict[str, Any]:
        level = request.params.get("level")
        if not isinstance(level, str):
            raise InvalidParams("Missing required parameter 'level'")
        try:
            level_rank(level)
        except ValueError as e:
            raise InvalidParams(f"Invalid parameter 'level': {e}") from e
        self.notification_level = level.lower()
        logger.info(f"Client log level set to {self.notification_level}")
        return {}

    async def _list_capabilities(self, request: Request) -> dict[str, Any]:
        kind_name = request.params.get("kind")
        kind = None
        if kind_name is not None:
            kind = KIND_PREFIXES.get(kind_name) if isinstance(kind_name, str) else None
            if kind is None:
                raise InvalidParams(
                    f"Invalid parameter 'kind': expected one of {', '.join(KIND_PREFIXES)}"
                )
        return {
            "capabilities": [d.to_listing() for d in self.registry.list_descriptors(kind)]
        }

    async def _list_tools(self, request: Request) -> dict[str, Any]:
        return {
            "tools": [
                {"name": d.name, "description": d.description, "inputSchema": d.input_schema()}
                for d in self.registry.list_descriptors(CapabilityKind.TOOL)
            ]
        }

    async def _list_resources(self, request: Request) -> dict[str, Any]:
        return {
            "resources": [
                {"uri": d.name, "name": d.title or d.name, "description": d.description, "mimeType": d.mime_type}
                for d in self.registry.list_descriptors(CapabilityKind.RESOURCE)
                if not d.is_template
            ]
        }

    async def _list_resource_templates(self, request: Request) -> dict[str, Any]:
        return {
            "resourceTemplates": [
                {"uriTemplate": d.name, "name": d.title or d.name, "description": d.description, "mimeType": d.mime_type}
                for d in self.registry.list_descriptors(CapabilityKind.RESOURCE)
                if d.is_template
            ]
        }

    async def _list_prompts(self, request: Request) -> dict[str, Any]:
        return {
            "prompts": [
                {
                    "name": d.name,
                    "description": d.description,
                    "arguments": [
                        {"name": p.name, "description": p.description, "required": p.required}
                        for p in d.params
                    ],
                }
                for d in self.registry.list_descriptors(CapabilityKind.PROMPT)
            ]
        }

    async def _call_tool(self, request: Request) -> Any:
        name, arguments = _name_and_arguments(request.params)
        return await self.invoke(CapabilityKind.TOOL, name, arguments, request.id)

    async def _get_prompt(self, request: Request) -> Any:
        name, arguments = _name_and_arguments(request.params)
        return await self.invoke(CapabilityKind.PROMPT, name, arguments, request.id)

    async def _read_resource(self, request: Request) -> Any:
        uri = request.params.get("uri")
        if not isinstance(uri, str) or not uri:
            raise InvalidParams("Missing required parameter 'uri'")
        params = {"_meta": request.params["_meta"]} if "_meta" in request.params else {}
        return await self.invoke(CapabilityKind.RESOURCE, uri, params, request.id)


def _name_and_arguments(params: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    """Unpack the {name, arguments, _meta} params of tools/call and prompts/get."""
    name = params.get("name")
    if not isinstance(name, str) or not name:
        raise InvalidParams("Missing required parameter 'name'")

    arguments = params.get("arguments")
    if arguments is None:
        arguments = {}
    elif not isinstance(arguments, dict):
        raise InvalidParams("Invalid parameter 'arguments': expected an object")

    if "_meta" in params:
        arguments = {**arguments, "_meta": params["_meta"]}
    return name, arguments
