"""Server layer — method dispatcher, HTTP transport adapter and app."""

from exmcp.server.dispatcher import MethodDispatcher
from exmcp.server.transport import HttpTransportAdapter, TransportResult

__all__ = [
    "HttpTransportAdapter",
    "MethodDispatcher",
    "TransportResult",
]
