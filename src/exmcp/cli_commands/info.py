"""``exmcp info`` — print the server-info probe document."""

from __future__ import annotations

import click

from exmcp.cli_commands._output import load_settings, print_json


@click.command()
def info() -> None:
    """Show the document served to GET probes."""
    from exmcp.server.app import build_adapter

    adapter = build_adapter(load_settings())
    print_json(adapter.handle_probe().payload)
