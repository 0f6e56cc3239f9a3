"""Tool layer — the immutable registry and the example catalogue."""

from __future__ import annotations

from typing import TYPE_CHECKING

from exmcp.tools.examples import ADD_NUMBERS_TOOL, ECHO_TOOL, EXAMPLE_PROMPT, TEST_RESOURCE
from exmcp.tools.registry import ServerRegistry
from exmcp.tools.weather import WeatherClient, WeatherReport, weather_tool

if TYPE_CHECKING:
    from exmcp.config import ServerSettings

__all__ = [
    "ServerRegistry",
    "WeatherClient",
    "WeatherReport",
    "build_default_registry",
]


def build_default_registry(settings: ServerSettings) -> ServerRegistry:
    """Assemble the example tools, resource and prompt."""
    return ServerRegistry(
        tools=[ADD_NUMBERS_TOOL, ECHO_TOOL, weather_tool(WeatherClient(settings.weather))],
        resources=[TEST_RESOURCE],
        prompts=[EXAMPLE_PROMPT],
    )
