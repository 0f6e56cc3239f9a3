"""Shared fixtures: settings without an API key and the example catalogue."""

from __future__ import annotations

import pytest

from exmcp.config import ServerSettings, WeatherSettings
from exmcp.server.dispatcher import MethodDispatcher
from exmcp.server.transport import HttpTransportAdapter
from exmcp.tools import build_default_registry
from exmcp.tools.registry import ServerRegistry


@pytest.fixture
def settings() -> ServerSettings:
    return ServerSettings(weather=WeatherSettings(api_key=None))


@pytest.fixture
def registry(settings: ServerSettings) -> ServerRegistry:
    return build_default_registry(settings)


@pytest.fixture
def dispatcher(registry: ServerRegistry, settings: ServerSettings) -> MethodDispatcher:
    return MethodDispatcher(registry, settings.info)


@pytest.fixture
def adapter(dispatcher: MethodDispatcher) -> HttpTransportAdapter:
    return HttpTransportAdapter(dispatcher)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Strip exmcp-related variables so CLI commands see defaults."""
    for var in (
        "OPENWEATHER_API_KEY",
        "OPENWEATHER_BASE_URL",
        "EXMCP_WEATHER_TIMEOUT",
        "EXMCP_WEATHER_LANG",
        "EXMCP_HOST",
        "EXMCP_PORT",
        "EXMCP_TELEMETRY",
        "EXMCP_TELEMETRY_CONSOLE",
        "EXMCP_OTLP_ENDPOINT",
    ):
        monkeypatch.delenv(var, raising=False)
