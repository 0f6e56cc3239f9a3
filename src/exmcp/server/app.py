"""Starlette application and uvicorn launcher for the MCP HTTP endpoint.

A single catch-all route serves every path: ``POST`` carries JSON-RPC
requests, ``GET``/``HEAD`` return the server-info document.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from exmcp.server.dispatcher import MethodDispatcher
from exmcp.server.transport import HttpTransportAdapter
from exmcp.tools import build_default_registry

if TYPE_CHECKING:
    from exmcp.config import ServerSettings

logger = logging.getLogger(__name__)


def build_adapter(settings: ServerSettings) -> HttpTransportAdapter:
    """Wire registry, dispatcher and adapter from *settings*."""
    registry = build_default_registry(settings)
    dispatcher = MethodDispatcher(registry, settings.info)
    return HttpTransportAdapter(dispatcher)


def create_app(adapter: HttpTransportAdapter, *, debug: bool = False) -> Starlette:
    """Expose *adapter* on a single endpoint."""

    async def endpoint(request: Request) -> Response:
        if request.method == "POST":
            body = await request.body()
            result = await adapter.handle_post(body)
        else:
            result = adapter.handle_probe()
        return JSONResponse(result.payload, status_code=result.status)

    return Starlette(
        debug=debug,
        routes=[Route("/{path:path}", endpoint, methods=["GET", "HEAD", "POST"])],
    )


def run_server(settings: ServerSettings, *, log_level: str = "info") -> None:
    """Serve the default example catalogue until interrupted."""
    app = create_app(build_adapter(settings))
    logger.info("Starting MCP HTTP server on http://%s:%s", settings.host, settings.port)
    if not settings.weather.api_key:
        logger.warning("OPENWEATHER_API_KEY not set; get_weather will return mock data")
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=log_level,
    )
