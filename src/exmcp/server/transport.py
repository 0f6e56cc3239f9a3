"""HttpTransportAdapter — turns raw HTTP bodies into dispatcher calls.

Converts every failure into a JSON-RPC envelope and pairs it with the HTTP
status the client should see:

* unparsable body -> ``PARSE_ERROR``, status 400, id ``null``
* invalid request object or fault escaping the dispatcher -> ``INTERNAL_ERROR``, status 500
* anything the dispatcher answers (results and method errors alike) -> status 200
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from exmcp.protocol.models import INTERNAL_ERROR, PARSE_ERROR, JsonRpcRequest, JsonRpcResponse

if TYPE_CHECKING:
    from exmcp.server.dispatcher import MethodDispatcher

logger = logging.getLogger(__name__)

SERVER_DESCRIPTION = "MCP HTTP Server"


@dataclass(frozen=True)
class TransportResult:
    """HTTP status plus the JSON document to send back."""

    status: int
    payload: dict[str, Any]


class HttpTransportAdapter:
    """Bridges an HTTP endpoint and a :class:`MethodDispatcher`."""

    def __init__(self, dispatcher: MethodDispatcher) -> None:
        self._dispatcher = dispatcher

    @property
    def dispatcher(self) -> MethodDispatcher:
        return self._dispatcher

    def handle_probe(self) -> TransportResult:
        """Answer a body-less probe with the static server-info document."""
        info = self._dispatcher.server_info
        return TransportResult(
            status=200,
            payload={
                "name": info.name,
                "version": info.version,
                "description": SERVER_DESCRIPTION,
                "methods": self._dispatcher.methods,
            },
        )

    async def handle_post(self, body: bytes) -> TransportResult:
        """Decode *body*, dispatch it, and wrap the outcome."""
        try:
            data = _decode(body)
        except ValueError as exc:
            logger.warning("Request body (raw): %r", body[:1024])
            return _error(400, None, PARSE_ERROR, f"Parse error: {exc}")

        request_id = data.get("id") if isinstance(data, dict) else None
        try:
            if not isinstance(data, dict):
                msg = f"request must be a JSON object, got {type(data).__name__}"
                raise TypeError(msg)
            request = JsonRpcRequest.model_validate(data)
        except (TypeError, ValidationError) as exc:
            logger.error("Request handling error: %s", exc)
            return _error(500, _safe_id(request_id), INTERNAL_ERROR, f"Internal error: {exc}")

        logger.info("Request: %s (id: %s)", request.method, request.id)
        logger.debug("Request body: %s", json.dumps(data, indent=2, default=str))

        try:
            response = await self._dispatcher.dispatch(request)
        except Exception as exc:
            logger.exception("Request handling error")
            return _error(500, request.id, INTERNAL_ERROR, f"Internal error: {exc}")

        wire = response.to_wire()
        logger.info(
            "Response: %s (id: %s)", "error" if response.is_error else "success", response.id
        )
        logger.debug("Response body: %s", json.dumps(wire, indent=2, default=str))
        return TransportResult(status=200, payload=wire)


def _decode(body: bytes) -> Any:
    if not body.strip():
        msg = "empty request body"
        raise ValueError(msg)
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"request body is not valid UTF-8 ({exc.reason})"
        raise ValueError(msg) from exc
    # json.JSONDecodeError is a ValueError subclass
    return json.loads(text)


def _safe_id(value: Any) -> Any:
    """Echo only ids that are valid JSON-RPC id types."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    return value


def _error(status: int, request_id: Any, code: int, message: str) -> TransportResult:
    return TransportResult(
        status=status,
        payload=JsonRpcResponse.failure(request_id, code, message).to_wire(),
    )
