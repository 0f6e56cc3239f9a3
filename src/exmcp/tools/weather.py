"""WeatherClient — current-weather lookup with a synthetic fallback.

The lookup never fails: a missing API key, transport error, timeout,
non-200 status or malformed payload all produce a mock report flagged with
``degraded=True``.
"""

from __future__ import annotations

import json
import logging
import random
from datetime import datetime
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import BaseModel

from exmcp.protocol.models import TextContent, ToolDef, ToolParam
from exmcp.tools.examples import require_argument
from exmcp.utils.telemetry import ATTR_WEATHER_DEGRADED, get_tracer

if TYPE_CHECKING:
    from exmcp.config import WeatherSettings

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

MOCK_NOTE = "This is mock data (the weather provider was unavailable)"
MOCK_COUNTRY = "JP"
MOCK_DESCRIPTIONS = ("clear sky", "cloudy", "light rain", "sunny")

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class WeatherReport(BaseModel):
    """Outcome of a lookup.

    ``degraded`` is ``True`` when ``data`` is synthetic.
    """

    city: str
    degraded: bool
    data: dict[str, Any]

    @property
    def text(self) -> str:
        return json.dumps(self.data, indent=2, ensure_ascii=False)


class WeatherClient:
    """Fetches current conditions from an OpenWeatherMap-compatible API."""

    def __init__(self, settings: WeatherSettings, *, rng: random.Random | None = None) -> None:
        self._settings = settings
        self._rng = rng or random.Random()

    async def lookup(self, city: str) -> WeatherReport:
        with _tracer.start_as_current_span("exmcp.weather.lookup") as span:
            report = await self._lookup(city)
            span.set_attribute(ATTR_WEATHER_DEGRADED, report.degraded)
            return report

    async def _lookup(self, city: str) -> WeatherReport:
        if not self._settings.api_key:
            logger.info("No weather API key configured; returning mock data for %s", city)
            return self.mock_report(city)

        params = {
            "q": city,
            "appid": self._settings.api_key,
            "units": self._settings.units,
            "lang": self._settings.lang,
        }
        try:
            async with httpx.AsyncClient(timeout=self._settings.timeout) as client:
                response = await client.get(self._settings.base_url, params=params)
        except httpx.HTTPError as exc:
            logger.warning("Weather lookup for %s failed: %s", city, exc)
            return self.mock_report(city)
        except Exception as exc:
            # InvalidURL, CookieConflict and friends sit outside httpx.HTTPError
            logger.warning("Weather lookup for %s failed (%s): %s", city, type(exc).__name__, exc)
            return self.mock_report(city)

        if response.status_code != 200:
            logger.warning(
                "Weather provider returned HTTP %s for %s", response.status_code, city
            )
            return self.mock_report(city)

        try:
            data = _format_observation(response.json())
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.warning("Unexpected weather payload for %s: %r", city, exc)
            return self.mock_report(city)

        return WeatherReport(city=city, degraded=False, data=data)

    def mock_report(self, city: str) -> WeatherReport:
        """Build a synthetic report with random values."""
        rng = self._rng
        data = {
            "city": city,
            "country": MOCK_COUNTRY,
            "temperature": f"{15 + rng.randrange(20)}°C",
            "feels_like": f"{17 + rng.randrange(20)}°C",
            "humidity": f"{40 + rng.randrange(40)}%",
            "pressure": f"{1000 + rng.randrange(50)} hPa",
            "description": rng.choice(MOCK_DESCRIPTIONS),
            "wind_speed": f"{rng.randrange(10)} m/s",
            "timestamp": datetime.now().strftime(_TIMESTAMP_FORMAT),
            "synthetic": True,
            "note": MOCK_NOTE,
        }
        return WeatherReport(city=city, degraded=True, data=data)


def _format_observation(payload: dict[str, Any]) -> dict[str, Any]:
    main = payload["main"]
    return {
        "city": payload["name"],
        "country": payload["sys"]["country"],
        "temperature": f"{main['temp']}°C",
        "feels_like": f"{main['feels_like']}°C",
        "humidity": f"{main['humidity']}%",
        "pressure": f"{main['pressure']} hPa",
        "description": payload["weather"][0]["description"],
        "wind_speed": f"{payload['wind']['speed']} m/s",
        "timestamp": datetime.now().strftime(_TIMESTAMP_FORMAT),
    }


def weather_tool(client: WeatherClient) -> ToolDef:
    """Wrap *client* as the ``get_weather`` tool."""

    async def get_weather(arguments: dict[str, Any]) -> list[TextContent]:
        city = str(require_argument("get_weather", arguments, "city"))
        report = await client.lookup(city)
        return [TextContent(text=report.text)]

    return ToolDef(
        name="get_weather",
        description="Get the current weather for the given city",
        params=(
            ToolParam(
                name="city",
                type="string",
                description="City name (e.g. Tokyo, Osaka, Kyoto)",
            ),
        ),
        handler=get_weather,
    )
