"""Tests for HttpTransportAdapter."""

import json
import logging
from typing import Any
from unittest.mock import AsyncMock

import pytest

from exmcp.protocol.models import INTERNAL_ERROR, METHOD_NOT_FOUND, PARSE_ERROR
from exmcp.server.dispatcher import MethodDispatcher
from exmcp.server.transport import HttpTransportAdapter


def _body(payload: Any) -> bytes:
    return json.dumps(payload).encode()


class TestParseErrors:
    @pytest.mark.parametrize(
        "body",
        [b"", b"   ", b"{not json", b'{"jsonrpc": "2.0", "method": ', b"\xff\xfe\x00"],
    )
    async def test_parse_error(self, adapter: HttpTransportAdapter, body: bytes) -> None:
        result = await adapter.handle_post(body)
        assert result.status == 400
        assert result.payload["error"]["code"] == PARSE_ERROR
        assert result.payload["error"]["message"].startswith("Parse error")
        assert result.payload["id"] is None
        assert "result" not in result.payload

    async def test_raw_body_logged(
        self, adapter: HttpTransportAdapter, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="exmcp.server.transport"):
            await adapter.handle_post(b"{oops")
        assert "{oops" in caplog.text


class TestInvalidRequests:
    async def test_array_body(self, adapter: HttpTransportAdapter) -> None:
        result = await adapter.handle_post(_body([1, 2]))
        assert result.status == 500
        assert result.payload["error"]["code"] == INTERNAL_ERROR
        assert result.payload["id"] is None

    async def test_invalid_params_keeps_id(self, adapter: HttpTransportAdapter) -> None:
        result = await adapter.handle_post(
            _body({"jsonrpc": "2.0", "method": "tools/call", "id": 5, "params": "bad"})
        )
        assert result.status == 500
        assert result.payload["error"]["code"] == INTERNAL_ERROR
        assert result.payload["id"] == 5

    @pytest.mark.parametrize("bad_id", [True, False])
    async def test_boolean_id_rejected(self, adapter: HttpTransportAdapter, bad_id: bool) -> None:
        result = await adapter.handle_post(
            _body({"jsonrpc": "2.0", "method": "tools/list", "id": bad_id})
        )
        assert result.status == 500
        assert result.payload["error"]["code"] == INTERNAL_ERROR
        assert result.payload["id"] is None
        assert "result" not in result.payload

    async def test_null_id_is_dispatched(self, adapter: HttpTransportAdapter) -> None:
        result = await adapter.handle_post(
            _body({"jsonrpc": "2.0", "method": "tools/list", "id": None})
        )
        assert result.status == 200
        assert result.payload["id"] is None
        assert "tools" in result.payload["result"]

    async def test_unusable_id_becomes_null(self, adapter: HttpTransportAdapter) -> None:
        result = await adapter.handle_post(_body({"method": 3, "id": {"nested": True}}))
        assert result.status == 500
        assert result.payload["id"] is None


class TestDispatch:
    async def test_success(self, adapter: HttpTransportAdapter) -> None:
        result = await adapter.handle_post(
            _body({"jsonrpc": "2.0", "method": "tools/list", "id": "a1"})
        )
        assert result.status == 200
        assert result.payload["jsonrpc"] == "2.0"
        assert result.payload["id"] == "a1"
        assert "tools" in result.payload["result"]

    async def test_method_not_found_is_200(self, adapter: HttpTransportAdapter) -> None:
        result = await adapter.handle_post(_body({"jsonrpc": "2.0", "method": "foo", "id": 1}))
        assert result.status == 200
        assert result.payload["error"]["code"] == METHOD_NOT_FOUND
        assert "foo" in result.payload["error"]["message"]

    async def test_add_numbers(self, adapter: HttpTransportAdapter) -> None:
        result = await adapter.handle_post(
            _body(
                {
                    "jsonrpc": "2.0",
                    "method": "tools/call",
                    "id": 2,
                    "params": {"name": "add_numbers", "arguments": {"a": 2, "b": 3}},
                }
            )
        )
        assert result.status == 200
        assert "5" in result.payload["result"]["content"][0]["text"]

    async def test_dispatcher_fault_is_internal_error(self, dispatcher: MethodDispatcher) -> None:
        dispatcher.dispatch = AsyncMock(side_effect=RuntimeError("broken"))  # type: ignore[method-assign]
        adapter = HttpTransportAdapter(dispatcher)

        result = await adapter.handle_post(_body({"method": "tools/list", "id": 11}))
        assert result.status == 500
        assert result.payload["error"]["code"] == INTERNAL_ERROR
        assert "broken" in result.payload["error"]["message"]
        assert result.payload["id"] == 11

    async def test_logs_request_and_response(
        self, adapter: HttpTransportAdapter, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="exmcp.server.transport"):
            await adapter.handle_post(_body({"method": "initialize", "id": 3}))
        assert "Request: initialize (id: 3)" in caplog.text
        assert "Response: success (id: 3)" in caplog.text


class TestProbe:
    def test_server_info(self, adapter: HttpTransportAdapter) -> None:
        result = adapter.handle_probe()
        assert result.status == 200
        assert result.payload == {
            "name": "example_http_server",
            "version": "1.0.0",
            "description": "MCP HTTP Server",
            "methods": [
                "initialize",
                "tools/list",
                "tools/call",
                "resources/list",
                "resources/read",
                "prompts/list",
                "prompts/get",
            ],
        }
