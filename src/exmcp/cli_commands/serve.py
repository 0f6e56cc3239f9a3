"""``exmcp serve`` — run the HTTP server."""

from __future__ import annotations

import logging
import sys

import click
from rich.logging import RichHandler

from exmcp.cli_commands._output import console, load_settings

_EXAMPLE_INIT = (
    '{"jsonrpc":"2.0","method":"initialize","id":1,"params":{"protocolVersion":"2024-11-05",'
    '"capabilities":{},"clientInfo":{"name":"test","version":"1.0"}}}'
)


@click.command()
@click.option("--host", default=None, help="Bind address (default: EXMCP_HOST or localhost).")
@click.option("--port", type=int, default=None, help="Bind port (default: EXMCP_PORT or 9292).")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="info",
    help="Logging level for exmcp and uvicorn.",
)
@click.option("--telemetry", is_flag=True, help="Export OpenTelemetry spans (console by default).")
@click.option(
    "--otlp-endpoint",
    default=None,
    metavar="URL",
    help="Also export spans over OTLP/gRPC to URL (implies --telemetry).",
)
def serve(
    host: str | None,
    port: int | None,
    log_level: str,
    telemetry: bool,
    otlp_endpoint: str | None,
) -> None:
    """Serve the example tools over HTTP JSON-RPC."""
    from exmcp.server.app import run_server

    settings = load_settings()
    updates: dict[str, object] = {}
    if host is not None:
        updates["host"] = host
    if port is not None:
        updates["port"] = port
    if telemetry or otlp_endpoint:
        telemetry_updates: dict[str, object] = {"enabled": True}
        if otlp_endpoint:
            telemetry_updates["otlp_endpoint"] = otlp_endpoint
        updates["telemetry"] = settings.telemetry.model_copy(update=telemetry_updates)
    if updates:
        settings = settings.model_copy(update=updates)

    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    if settings.telemetry.active:
        from exmcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(settings.telemetry, settings.info)
        except ImportError as exc:
            console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    url = f"http://{settings.host}:{settings.port}"
    console.print(f"Starting MCP HTTP server on [bold]{url}[/bold]")
    console.print("POST JSON-RPC requests to any path; GET returns server info.")
    console.print("Example initialization:")
    console.print(
        f"  curl -i -X POST {url} -H \"Content-Type: application/json\" -d '{_EXAMPLE_INIT}'",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
    console.print("Press Ctrl+C to stop the server")

    run_server(settings, log_level=log_level)
