"""Tests for JSON-RPC envelopes and MCP descriptors."""

import pytest
from pydantic import ValidationError

from exmcp.protocol.models import (
    INTERNAL_ERROR,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    PromptArgument,
    PromptDef,
    PromptMessage,
    ResourceDef,
    TextContent,
    ToolDef,
    ToolParam,
)


async def _noop(arguments: dict) -> list[TextContent]:
    return [TextContent(text="ok")]


class TestErrorCodes:
    def test_fixed_values(self) -> None:
        assert PARSE_ERROR == -32700
        assert METHOD_NOT_FOUND == -32601
        assert INTERNAL_ERROR == -32603


class TestJsonRpcRequest:
    def test_defaults(self) -> None:
        req = JsonRpcRequest(method="tools/list")
        assert req.jsonrpc == "2.0"
        assert req.id is None
        assert req.params == {}

    def test_id_types_preserved(self) -> None:
        assert JsonRpcRequest(method="x", id=42).id == 42
        assert JsonRpcRequest(method="x", id="abc").id == "abc"
        assert isinstance(JsonRpcRequest.model_validate({"method": "x", "id": 7}).id, int)
        assert JsonRpcRequest.model_validate({"method": "x", "id": 1.5}).id == 1.5

    @pytest.mark.parametrize("bad_id", [True, False, [1], {"a": 1}])
    def test_boolean_and_structured_ids_rejected(self, bad_id: object) -> None:
        with pytest.raises(ValidationError):
            JsonRpcRequest.model_validate({"method": "x", "id": bad_id})

    def test_numeric_string_id_not_coerced(self) -> None:
        req = JsonRpcRequest.model_validate({"method": "x", "id": "7"})
        assert req.id == "7"

    def test_null_params_become_empty(self) -> None:
        req = JsonRpcRequest.model_validate({"method": "x", "params": None})
        assert req.params == {}

    def test_missing_method_is_empty(self) -> None:
        req = JsonRpcRequest.model_validate({"id": 1})
        assert req.method == ""

    def test_non_mapping_params_rejected(self) -> None:
        with pytest.raises(ValidationError):
            JsonRpcRequest.model_validate({"method": "x", "params": [1, 2]})


class TestJsonRpcResponse:
    def test_success_wire_shape(self) -> None:
        wire = JsonRpcResponse.success(3, {"tools": []}).to_wire()
        assert wire == {"jsonrpc": "2.0", "result": {"tools": []}, "id": 3}

    def test_failure_wire_shape(self) -> None:
        wire = JsonRpcResponse.failure(None, PARSE_ERROR, "Parse error: x").to_wire()
        assert wire == {
            "jsonrpc": "2.0",
            "error": {"code": -32700, "message": "Parse error: x"},
            "id": None,
        }
        assert "result" not in wire

    def test_error_data_kept_when_set(self) -> None:
        resp = JsonRpcResponse(id=1, error=JsonRpcError(code=-1, message="m", data={"k": 1}))
        assert resp.to_wire()["error"]["data"] == {"k": 1}

    def test_both_payloads_rejected(self) -> None:
        with pytest.raises(ValidationError):
            JsonRpcResponse(
                id=1, result={}, error=JsonRpcError(code=INTERNAL_ERROR, message="x")
            )

    def test_is_error(self) -> None:
        assert JsonRpcResponse.failure(1, INTERNAL_ERROR, "x").is_error
        assert not JsonRpcResponse.success(1, {}).is_error


class TestToolDef:
    def test_input_schema(self) -> None:
        tool = ToolDef(
            name="search",
            description="Search",
            params=(
                ToolParam(name="query", type="string", description="What to find"),
                ToolParam(name="limit", type="number", required=False),
            ),
            handler=_noop,
        )
        schema = tool.input_schema()
        assert schema["type"] == "object"
        assert schema["properties"]["query"] == {"type": "string", "description": "What to find"}
        assert schema["properties"]["limit"] == {"type": "number"}
        assert schema["required"] == ["query"]

    def test_listing_shape(self) -> None:
        tool = ToolDef(name="t", description="d", handler=_noop)
        listing = tool.to_listing()
        assert set(listing) == {"name", "description", "inputSchema"}
        assert listing["inputSchema"] == {"type": "object", "properties": {}, "required": []}

    async def test_call_awaits_handler(self) -> None:
        tool = ToolDef(name="t", handler=_noop)
        content = await tool.call({})
        assert content == [TextContent(text="ok")]

    def test_frozen(self) -> None:
        tool = ToolDef(name="t", handler=_noop)
        with pytest.raises(ValidationError):
            tool.name = "other"  # type: ignore[misc]


class TestResourceDef:
    def test_listing_uses_wire_names(self) -> None:
        res = ResourceDef(uri="u", name="n", description="d", mime_type="text/plain")
        assert res.to_listing() == {
            "uri": "u",
            "name": "n",
            "description": "d",
            "mimeType": "text/plain",
        }

    def test_accepts_alias(self) -> None:
        res = ResourceDef.model_validate({"uri": "u", "name": "n", "mimeType": "text/html"})
        assert res.mime_type == "text/html"


class TestPromptDef:
    def test_listing_and_render(self) -> None:
        prompt = PromptDef(
            name="p",
            description="desc",
            arguments=(PromptArgument(name="message", required=True),),
            template=lambda args: [PromptMessage(content=TextContent(text=args["message"]))],
        )
        assert prompt.to_listing()["arguments"] == [
            {"name": "message", "description": "", "required": True}
        ]
        messages = prompt.render({"message": "hi"})
        assert messages[0].role == "user"
        assert messages[0].content.text == "hi"
