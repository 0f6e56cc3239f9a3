"""exmcp CLI entrypoint."""

from __future__ import annotations

import click

from exmcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="exmcp")
def main() -> None:
    """exmcp — example MCP server over HTTP."""


# Register subcommands
from exmcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
