"""ServerRegistry — the immutable tool/resource/prompt catalogue.

Built once at startup and handed to the dispatcher; nothing mutates it
afterwards, so request handlers can share it freely.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from exmcp.protocol.models import PromptDef, ResourceDef, ToolDef


class ServerRegistry:
    """Name-keyed lookup over the descriptors a server exposes.

    Usage::

        registry = ServerRegistry(tools=[add_tool, echo_tool], resources=[res])
        tool = registry.get_tool("echo")       # None when absent
        listing = registry.tools               # registration order
    """

    def __init__(
        self,
        tools: Iterable[ToolDef] = (),
        resources: Iterable[ResourceDef] = (),
        prompts: Iterable[PromptDef] = (),
    ) -> None:
        self._tools = tuple(tools)
        self._resources = tuple(resources)
        self._prompts = tuple(prompts)
        self._tool_map = MappingProxyType(_index("tool", self._tools))
        self._prompt_map = MappingProxyType(_index("prompt", self._prompts))

    @property
    def tools(self) -> tuple[ToolDef, ...]:
        return self._tools

    @property
    def resources(self) -> tuple[ResourceDef, ...]:
        return self._resources

    @property
    def prompts(self) -> tuple[PromptDef, ...]:
        return self._prompts

    def get_tool(self, name: str) -> ToolDef | None:
        return self._tool_map.get(name)

    def get_prompt(self, name: str) -> PromptDef | None:
        return self._prompt_map.get(name)


_T = TypeVar("_T", "ToolDef", "PromptDef")


def _index(kind: str, items: tuple[_T, ...]) -> dict[str, _T]:
    index: dict[str, _T] = {}
    for item in items:
        if item.name in index:
            msg = f"duplicate {kind} name: {item.name!r}"
            raise ValueError(msg)
        index[item.name] = item
    return index
