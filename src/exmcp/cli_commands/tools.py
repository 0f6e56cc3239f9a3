"""``exmcp tools`` — list and invoke the registered tools in-process."""

from __future__ import annotations

import asyncio
import json
import sys

import click

from exmcp.cli_commands._output import console, load_settings, print_json, print_tools_table


@click.group()
def tools() -> None:
    """List and invoke tools."""


@tools.command("list")
def list_tools() -> None:
    """List the registered tools."""
    from exmcp.tools import build_default_registry

    registry = build_default_registry(load_settings())
    if not registry.tools:
        console.print("[yellow]No tools registered.[/yellow]")
        return
    print_tools_table(registry.tools)


@tools.command("call")
@click.argument("name")
@click.option("--args", "raw_args", default="{}", help="Tool arguments as a JSON object.")
def call(name: str, raw_args: str) -> None:
    """Invoke tool NAME through the dispatcher and print the response envelope."""
    from exmcp.protocol.models import JsonRpcRequest
    from exmcp.server.app import build_adapter

    try:
        arguments = json.loads(raw_args)
    except json.JSONDecodeError as exc:
        console.print(f"[red]Invalid --args:[/red] {exc}")
        sys.exit(1)
    if not isinstance(arguments, dict):
        console.print("[red]Invalid --args:[/red] expected a JSON object")
        sys.exit(1)

    dispatcher = build_adapter(load_settings()).dispatcher
    request = JsonRpcRequest(
        method="tools/call", id=1, params={"name": name, "arguments": arguments}
    )
    response = asyncio.run(dispatcher.dispatch(request))
    print_json(response.to_wire())
    if response.is_error:
        sys.exit(1)
