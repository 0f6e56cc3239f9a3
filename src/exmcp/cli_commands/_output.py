"""Shared CLI output helpers."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from exmcp.config import ServerSettings
    from exmcp.protocol.models import ToolDef

console = Console()


def load_settings() -> ServerSettings:
    """Read settings from the environment, exiting with status 1 on error."""
    from exmcp.config import ConfigError, ServerSettings

    try:
        return ServerSettings.from_env()
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)


def print_json(data: Any) -> None:
    console.print_json(json.dumps(data, default=str, ensure_ascii=False))


def print_tools_table(tools: tuple[ToolDef, ...]) -> None:
    """Pretty-print registered tools as a table."""
    table = Table(title="Registered Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Arguments")

    for tool in tools:
        args = ", ".join(
            f"{p.name}: {p.type}" + ("" if p.required else "?") for p in tool.params
        )
        table.add_row(tool.name, _truncate(tool.description), args or "-")

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
