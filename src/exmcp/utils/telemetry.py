"""OpenTelemetry tracing for the dispatcher and the weather lookup.

Modules take a tracer from :func:`get_tracer` at import time.  Until
:func:`configure_telemetry` installs an SDK provider the API hands out
no-op spans, so the server runs unchanged without the ``otel`` extra.

Span attributes::

    exmcp.dispatch        exmcp.rpc.method, exmcp.rpc.id, exmcp.rpc.error_code
    exmcp.tool.call       exmcp.tool.name
    exmcp.weather.lookup  exmcp.weather.degraded
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from opentelemetry import trace

if TYPE_CHECKING:
    from exmcp.config import TelemetrySettings
    from exmcp.protocol.models import ServerInfo

ATTR_METHOD = "exmcp.rpc.method"
ATTR_REQUEST_ID = "exmcp.rpc.id"
ATTR_ERROR_CODE = "exmcp.rpc.error_code"
ATTR_TOOL_NAME = "exmcp.tool.name"
ATTR_WEATHER_DEGRADED = "exmcp.weather.degraded"

_INSTRUMENTATION_NAME = "exmcp"

_EXTRA_HINT = "Install it with: pip install exmcp[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(settings: TelemetrySettings, info: ServerInfo) -> Any:
    """Install a tracer provider that exports the server's spans.

    The ``service.name`` and ``service.version`` resource attributes come
    from *info*.  Spans go to stdout when ``settings.console`` is set and
    over OTLP/gRPC when ``settings.otlp_endpoint`` is set.

    Returns the installed ``TracerProvider``.

    Raises:
        ImportError: If ``opentelemetry-sdk`` (or, for OTLP export,
            ``opentelemetry-exporter-otlp``) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
        from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
    except ImportError as exc:
        raise ImportError(f"opentelemetry-sdk is required for span export. {_EXTRA_HINT}") from exc

    resource = Resource.create({"service.name": info.name, "service.version": info.version})  # pyright: ignore[reportUnknownVariableType,reportUnknownMemberType]
    provider = TracerProvider(resource=resource)  # pyright: ignore[reportUnknownVariableType]

    # Resolve the OTLP exporter before touching the global provider.
    if settings.otlp_endpoint:
        provider.add_span_processor(BatchSpanProcessor(_otlp_exporter(settings.otlp_endpoint)))
    if settings.console:
        from opentelemetry.sdk.trace.export import ConsoleSpanExporter  # pyright: ignore[reportMissingImports,reportUnknownVariableType]

        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)  # pyright: ignore[reportUnknownArgumentType]
    return provider


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
    except ImportError as exc:
        msg = f"opentelemetry-exporter-otlp is required for OTLP export to {endpoint}. {_EXTRA_HINT}"
        raise ImportError(msg) from exc
    return OTLPSpanExporter(endpoint=endpoint)
