"""Protocol layer — JSON-RPC envelopes, MCP descriptors and errors."""

from exmcp.protocol.errors import (
    MethodNotFoundError,
    PromptNotFoundError,
    ProtocolError,
    ToolArgumentError,
    ToolExecutionError,
    ToolNotFoundError,
)
from exmcp.protocol.models import (
    INTERNAL_ERROR,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    PROTOCOL_VERSION,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    PromptArgument,
    PromptDef,
    PromptMessage,
    ResourceDef,
    ServerInfo,
    TextContent,
    ToolDef,
    ToolParam,
)

__all__ = [
    "INTERNAL_ERROR",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "PROTOCOL_VERSION",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MethodNotFoundError",
    "PromptArgument",
    "PromptDef",
    "PromptMessage",
    "PromptNotFoundError",
    "ProtocolError",
    "ResourceDef",
    "ServerInfo",
    "TextContent",
    "ToolArgumentError",
    "ToolDef",
    "ToolExecutionError",
    "ToolNotFoundError",
    "ToolParam",
]
