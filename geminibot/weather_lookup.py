"""Geocode a place with Gemini, then look up its current weather."""

from __future__ import annotations

import logging
import math
from typing import Any

from geminibot.exceptions import ServiceError, WeatherLookupError
from geminibot.geocoding import build_location_prompt, describe_place, parse_coordinates
from geminibot.models import GeoCoordinate, WeatherCommand, WeatherSummary
from geminibot.services.gemini_service import GeminiService
from geminibot.services.weather_service import WeatherService

logger = logging.getLogger(__name__)

UNKNOWN_CONDITIONS = "unknown conditions"


def celsius_to_fahrenheit(celsius: float) -> int:
    """Convert to Fahrenheit, rounding halves up."""

    return math.floor(celsius * 9 / 5 + 32 + 0.5)


def summarize(current: dict[str, Any]) -> WeatherSummary:
    """Reduce OpenWeatherMap's ``current`` block to a :class:`WeatherSummary`."""

    conditions = current.get("weather") or []
    description = next(
        (item["description"] for item in conditions if isinstance(item, dict) and item.get("description")),
        UNKNOWN_CONDITIONS,
    )
    return WeatherSummary(
        temperature_f=celsius_to_fahrenheit(current["temp"]),
        description=description,
        humidity_pct=current["humidity"],
        wind_speed_ms=current["wind_speed"],
    )


def format_summary(command: WeatherCommand, summary: WeatherSummary) -> str:
    place = describe_place(command.city, command.region, command.country)
    return (
        f"Current weather in {place}:\n"
        f"Temperature: {summary.temperature_f}°F\n"
        f"Description: {summary.description}\n"
        f"Humidity: {summary.humidity_pct}%\n"
        f"Wind Speed: {summary.wind_speed_ms:g} m/s"
    )


class WeatherLookup:
    """Runs the geocode, fetch and format stages for one ``/weather`` command."""

    def __init__(
        self,
        gemini: GeminiService,
        weather: WeatherService,
        json_mode: bool = True,
    ) -> None:
        self._gemini = gemini
        self._weather = weather
        self._json_mode = json_mode

    async def geocode(self, command: WeatherCommand) -> GeoCoordinate:
        prompt = build_location_prompt(command.city, command.region, command.country)
        text = await self._gemini.generate(prompt, json_output=self._json_mode)
        return parse_coordinates(text)

    async def lookup(self, command: WeatherCommand) -> str:
        """Return the formatted weather reply for ``command``.

        Every failure is re-raised as a single :class:`WeatherLookupError`
        whose message is shown to the user as-is.
        """

        try:
            coordinate = await self.geocode(command)
            logger.info(
                "Resolved location",
                extra={
                    "city": command.city,
                    "latitude": coordinate.latitude,
                    "longitude": coordinate.longitude,
                },
            )
            current = await self._weather.fetch_current(coordinate)
            return format_summary(command, summarize(current))
        except ServiceError as exc:
            logger.error("Weather lookup failed", extra={"city": command.city, "code": exc.code})
            raise WeatherLookupError(
                f"Failed to get weather information: {exc.message}",
                status_code=exc.status_code,
            ) from exc
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.exception("Malformed weather data", extra={"city": command.city})
            raise WeatherLookupError(f"Failed to get weather information: {exc}") from exc
