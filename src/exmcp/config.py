"""Server configuration: bind address, identity, weather provider and span export."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from exmcp.protocol.models import ServerInfo


class ConfigError(Exception):
    """Raised when environment configuration cannot be parsed."""


class WeatherSettings(BaseModel):
    """Settings for the outbound weather lookup.

    ``api_key`` left unset selects the synthetic fallback without any
    network traffic.
    """

    api_key: str | None = None
    base_url: str = "http://api.openweathermap.org/data/2.5/weather"
    timeout: float = Field(default=5.0, gt=0)
    units: str = "metric"
    lang: str = "en"

    @field_validator("api_key", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class TelemetrySettings(BaseModel):
    """Span export settings.

    Spans are exported only when ``enabled`` is set or an ``otlp_endpoint``
    is given.
    """

    enabled: bool = False
    console: bool = True
    otlp_endpoint: str | None = None

    @field_validator("otlp_endpoint", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def active(self) -> bool:
        return self.enabled or self.otlp_endpoint is not None


class ServerSettings(BaseModel):
    """Top-level server settings."""

    host: str = "localhost"
    port: int = Field(default=9292, ge=0, le=65535)
    info: ServerInfo = Field(default_factory=ServerInfo)
    weather: WeatherSettings = Field(default_factory=WeatherSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerSettings:
        """Build settings from environment variables.

        Raises:
            ConfigError: If a variable holds a value of the wrong type.
        """
        env = os.environ if environ is None else environ

        weather: dict[str, object] = {}
        for var, key in _WEATHER_ENV.items():
            if var in env:
                weather[key] = env[var]

        telemetry: dict[str, object] = {}
        for var, key in _TELEMETRY_ENV.items():
            if var in env:
                telemetry[key] = env[var]

        data: dict[str, object] = {"weather": weather, "telemetry": telemetry}
        for var, key in _SERVER_ENV.items():
            if var in env:
                data[key] = env[var]

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc


_WEATHER_ENV = {
    "OPENWEATHER_API_KEY": "api_key",
    "OPENWEATHER_BASE_URL": "base_url",
    "EXMCP_WEATHER_TIMEOUT": "timeout",
    "EXMCP_WEATHER_LANG": "lang",
}

_TELEMETRY_ENV = {
    "EXMCP_TELEMETRY": "enabled",
    "EXMCP_TELEMETRY_CONSOLE": "console",
    "EXMCP_OTLP_ENDPOINT": "otlp_endpoint",
}

_SERVER_ENV = {
    "EXMCP_HOST": "host",
    "EXMCP_PORT": "port",
}
