"""Protocol models — JSON-RPC 2.0 envelopes and MCP descriptors.

Implements the message format served over HTTP for the ``initialize``,
``tools/*``, ``resources/*`` and ``prompts/*`` methods.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Literal

from pydantic import (
    BaseModel,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)

PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603

PROTOCOL_VERSION = "2024-11-05"

# Strict so a JSON boolean id is rejected instead of coerced to 0 or 1.
RequestId = StrictInt | StrictFloat | StrictStr | None

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message."""

    jsonrpc: str = "2.0"
    method: str = ""
    id: RequestId = None
    params: dict[str, Any] = {}

    @field_validator("params", mode="before")
    @classmethod
    def _null_params(cls, value: Any) -> Any:
        return {} if value is None else value


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message carrying a result or an error."""

    jsonrpc: str = "2.0"
    id: RequestId = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @model_validator(mode="after")
    def _one_payload(self) -> JsonRpcResponse:
        if self.result is not None and self.error is not None:
            msg = "response must carry either 'result' or 'error', not both"
            raise ValueError(msg)
        return self

    @classmethod
    def success(cls, request_id: RequestId, result: dict[str, Any]) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: RequestId, code: int, message: str) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError(code=code, message=message))

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_wire(self) -> dict[str, Any]:
        """Render the envelope as sent to clients.

        ``id`` is always present (``null`` when unknown) and exactly one of
        ``result`` / ``error`` is emitted.
        """
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc}
        if self.error is not None:
            payload["error"] = self.error.model_dump(exclude_none=True)
        else:
            payload["result"] = self.result if self.result is not None else {}
        payload["id"] = self.id
        return payload


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------


class TextContent(BaseModel):
    """A text content item returned by tools and prompts."""

    type: Literal["text"] = "text"
    text: str


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------

ToolHandler = Callable[[dict[str, Any]], Awaitable[list[TextContent]]]


class ToolParam(BaseModel):
    """One named input of a tool."""

    model_config = {"frozen": True}

    name: str
    type: str = "string"
    description: str = ""
    required: bool = True


class ToolDef(BaseModel):
    """A named, schema-described tool backed by an async handler."""

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    name: str
    description: str = ""
    params: tuple[ToolParam, ...] = ()
    handler: ToolHandler = Field(exclude=True, repr=False)

    def input_schema(self) -> dict[str, Any]:
        properties: dict[str, Any] = {}
        required: list[str] = []
        for param in self.params:
            prop: dict[str, Any] = {"type": param.type}
            if param.description:
                prop["description"] = param.description
            properties[param.name] = prop
            if param.required:
                required.append(param.name)
        return {"type": "object", "properties": properties, "required": required}

    def to_listing(self) -> dict[str, Any]:
        """Shape used by ``tools/list``."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }

    async def call(self, arguments: dict[str, Any]) -> list[TextContent]:
        return await self.handler(arguments)


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


class ResourceDef(BaseModel):
    """A URI-addressed static resource as returned by ``resources/list``."""

    model_config = {"frozen": True, "populate_by_name": True}

    uri: str
    name: str
    description: str = ""
    mime_type: str = Field(default="text/plain", alias="mimeType")

    def to_listing(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


class PromptArgument(BaseModel):
    model_config = {"frozen": True}

    name: str
    description: str = ""
    required: bool = False


class PromptMessage(BaseModel):
    role: Literal["user", "assistant"] = "user"
    content: TextContent


PromptTemplate = Callable[[dict[str, Any]], list[PromptMessage]]


class PromptDef(BaseModel):
    """A named prompt template."""

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    name: str
    description: str = ""
    arguments: tuple[PromptArgument, ...] = ()
    template: PromptTemplate = Field(exclude=True, repr=False)

    def to_listing(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "arguments": [arg.model_dump() for arg in self.arguments],
        }

    def render(self, arguments: dict[str, Any]) -> list[PromptMessage]:
        return self.template(arguments)


# ---------------------------------------------------------------------------
# Server identity
# ---------------------------------------------------------------------------


class ServerInfo(BaseModel):
    """Name and version reported by ``initialize`` and the info probe."""

    model_config = {"frozen": True}

    name: str = "example_http_server"
    version: str = "1.0.0"
