"""exmcp — example MCP server speaking JSON-RPC 2.0 over HTTP."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from exmcp.server.dispatcher import MethodDispatcher as MethodDispatcher
    from exmcp.tools.registry import ServerRegistry as ServerRegistry

_LAZY_EXPORTS = {
    "MethodDispatcher": "exmcp.server.dispatcher",
    "ServerRegistry": "exmcp.tools.registry",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'exmcp' has no attribute {name!r}")
