"""Adapter for OpenWeatherMap's One Call API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from geminibot.config import Settings
from geminibot.exceptions import TransportError, WeatherFetchError
from geminibot.models import GeoCoordinate

logger = logging.getLogger(__name__)


class WeatherService:
    """Fetches current conditions for a coordinate, in metric units."""

    _excluded_blocks = "minutely,hourly,daily,alerts"

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings

    async def fetch_current(self, coordinate: GeoCoordinate) -> dict[str, Any]:
        """Return the ``current`` section of the One Call response."""

        params = {
            "lat": coordinate.latitude,
            "lon": coordinate.longitude,
            "appid": self._settings.openweathermap_api_key,
            "units": "metric",
            "exclude": self._excluded_blocks,
        }

        try:
            response = await self._client.get(
                self._settings.weather_api_url,
                params=params,
                timeout=self._settings.weather_timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Weather request timed out", exc_info=exc)
            raise TransportError("OpenWeatherMap request timed out") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Weather request failed",
                extra={
                    "status_code": exc.response.status_code,
                    "response_text": exc.response.text,
                },
            )
            raise TransportError(
                f"OpenWeatherMap returned HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.exception("Unexpected weather HTTP error")
            raise TransportError("OpenWeatherMap request failed") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise TransportError("Invalid OpenWeatherMap response payload") from exc

        current = data.get("current") if isinstance(data, dict) else None
        if not isinstance(current, dict) or not current:
            logger.error("Weather response without current conditions", extra={"raw_response": data})
            raise WeatherFetchError("Could not retrieve weather data from OpenWeatherMap.")

        return current
