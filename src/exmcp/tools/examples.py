"""Example tools, resource and prompt served by the demo server."""

from __future__ import annotations

from typing import Any

from exmcp.protocol.errors import ToolArgumentError
from exmcp.protocol.models import (
    PromptArgument,
    PromptDef,
    PromptMessage,
    ResourceDef,
    TextContent,
    ToolDef,
    ToolParam,
)

RESOURCE_READ_TEXT = "Hello from HTTP server resource!"
ECHO_PREFIX = "Hello from echo tool! Message: "


def require_argument(tool: str, arguments: dict[str, Any], name: str) -> Any:
    """Fetch a required argument or raise :class:`ToolArgumentError`."""
    if name not in arguments:
        raise ToolArgumentError(tool, name)
    return arguments[name]


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


async def add_numbers(arguments: dict[str, Any]) -> list[TextContent]:
    a = require_argument("add_numbers", arguments, "a")
    b = require_argument("add_numbers", arguments, "b")
    return [TextContent(text=f"The sum of {a} and {b} is {a + b}")]


async def echo(arguments: dict[str, Any]) -> list[TextContent]:
    message = require_argument("echo", arguments, "message")
    return [TextContent(text=f"{ECHO_PREFIX}{message}")]


ADD_NUMBERS_TOOL = ToolDef(
    name="add_numbers",
    description="A simple example tool that adds two numbers",
    params=(ToolParam(name="a", type="number"), ToolParam(name="b", type="number")),
    handler=add_numbers,
)

ECHO_TOOL = ToolDef(
    name="echo",
    description="A simple example tool that echoes back its arguments",
    params=(ToolParam(name="message", type="string"),),
    handler=echo,
)

# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------

TEST_RESOURCE = ResourceDef(
    uri="test_resource",
    name="Test resource",
    description="Test resource that echoes back the uri as its content",
    mime_type="text/plain",
)


def read_resource(uri: str | None) -> list[dict[str, Any]]:
    """Stubbed ``resources/read``: echo *uri* with a constant payload."""
    return [{"uri": uri, "mimeType": "text/plain", "text": RESOURCE_READ_TEXT}]


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


def _echo_prompt(arguments: dict[str, Any]) -> list[PromptMessage]:
    if "message" not in arguments:
        msg = "example_prompt requires argument 'message'"
        raise ValueError(msg)
    message = arguments["message"]
    return [PromptMessage(role="user", content=TextContent(text=str(message)))]


EXAMPLE_PROMPT = PromptDef(
    name="example_prompt",
    description="A simple example prompt that echoes back its arguments",
    arguments=(
        PromptArgument(
            name="message",
            description="The message to echo back",
            required=True,
        ),
    ),
    template=_echo_prompt,
)
