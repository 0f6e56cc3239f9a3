"""MethodDispatcher — routes JSON-RPC requests to MCP method handlers."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from exmcp.protocol.errors import (
    MethodNotFoundError,
    PromptNotFoundError,
    ProtocolError,
    ToolNotFoundError,
)
from exmcp.protocol.models import (
    INTERNAL_ERROR,
    METHOD_NOT_FOUND,
    PROTOCOL_VERSION,
    JsonRpcRequest,
    JsonRpcResponse,
    ServerInfo,
)
from exmcp.tools.examples import read_resource
from exmcp.utils.telemetry import (
    ATTR_ERROR_CODE,
    ATTR_METHOD,
    ATTR_REQUEST_ID,
    ATTR_TOOL_NAME,
    get_tracer,
)

if TYPE_CHECKING:
    from exmcp.tools.registry import ServerRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

MethodHandler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


class MethodDispatcher:
    """Resolves a request's method through a name-keyed table.

    Every handler runs inside a single failure boundary: anything raised
    while building a result becomes an ``INTERNAL_ERROR`` response carrying
    the original request id.

    Usage::

        dispatcher = MethodDispatcher(registry, ServerInfo())
        response = await dispatcher.dispatch(JsonRpcRequest(method="tools/list", id=1))
    """

    def __init__(self, registry: ServerRegistry, server_info: ServerInfo | None = None) -> None:
        self._registry = registry
        self._server_info = server_info or ServerInfo()
        self._handlers: dict[str, MethodHandler] = {
            "initialize": self._initialize,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
            "resources/list": self._resources_list,
            "resources/read": self._resources_read,
            "prompts/list": self._prompts_list,
            "prompts/get": self._prompts_get,
        }

    @property
    def server_info(self) -> ServerInfo:
        return self._server_info

    @property
    def methods(self) -> list[str]:
        """Supported method names in registration order."""
        return list(self._handlers)

    async def dispatch(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Run the handler for ``request.method`` and wrap its outcome."""
        with _tracer.start_as_current_span("exmcp.dispatch") as span:
            span.set_attribute(ATTR_METHOD, request.method)
            if request.id is not None:
                span.set_attribute(ATTR_REQUEST_ID, str(request.id))
            response = await self._dispatch(request)
            if response.error is not None:
                span.set_attribute(ATTR_ERROR_CODE, response.error.code)
            return response

    async def _dispatch(self, request: JsonRpcRequest) -> JsonRpcResponse:
        try:
            handler = self._handlers.get(request.method)
            if handler is None:
                raise MethodNotFoundError(request.method)
            result = await handler(request.params)
        except MethodNotFoundError as exc:
            logger.info("%s", exc)
            return JsonRpcResponse.failure(request.id, METHOD_NOT_FOUND, str(exc))
        except ProtocolError as exc:
            logger.warning("%s (id: %s)", exc, request.id)
            return JsonRpcResponse.failure(request.id, INTERNAL_ERROR, f"Internal error: {exc}")
        except Exception as exc:
            logger.exception("Error handling %s (id: %s)", request.method, request.id)
            return JsonRpcResponse.failure(request.id, INTERNAL_ERROR, f"Internal error: {exc}")
        return JsonRpcResponse.success(request.id, result)

    # ------------------------------------------------------------------
    # Method handlers
    # ------------------------------------------------------------------

    async def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}, "resources": {}, "prompts": {}},
            "serverInfo": self._server_info.model_dump(),
        }

    async def _tools_list(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": [tool.to_listing() for tool in self._registry.tools]}

    async def _tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        tool = self._registry.get_tool(name) if isinstance(name, str) else None
        if tool is None:
            raise ToolNotFoundError(str(name))
        arguments = params.get("arguments") or {}

        with _tracer.start_as_current_span("exmcp.tool.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, tool.name)
            content = await tool.call(arguments)
        return {"content": [item.model_dump() for item in content]}

    async def _resources_list(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"resources": [resource.to_listing() for resource in self._registry.resources]}

    async def _resources_read(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"contents": read_resource(params.get("uri"))}

    async def _prompts_list(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"prompts": [prompt.to_listing() for prompt in self._registry.prompts]}

    async def _prompts_get(self, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        prompt = self._registry.get_prompt(name) if isinstance(name, str) else None
        if prompt is None:
            raise PromptNotFoundError(str(name))
        messages = prompt.render(params.get("arguments") or {})
        return {
            "description": prompt.description,
            "messages": [message.model_dump() for message in messages],
        }
