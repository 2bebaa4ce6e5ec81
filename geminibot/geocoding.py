"""Prompting Gemini for coordinates and parsing what comes back."""

from __future__ import annotations

import json
import logging
import re

from geminibot.exceptions import GeocodeParseError
from geminibot.models import GeoCoordinate

logger = logging.getLogger(__name__)

SCHEMA_ERROR = (
    "Failed to get location data from Gemini. Please make sure it has the correct schema"
)

_FENCE = re.compile(r"```[A-Za-z0-9_+-]*[ \t]*\n?")


def describe_place(city: str, region: str | None = None, country: str | None = None) -> str:
    """Join the supplied place parts, skipping the missing ones."""

    return ", ".join(part for part in (city, region, country) if part)


def build_location_prompt(city: str, region: str | None = None, country: str | None = None) -> str:
    place = describe_place(city, region, country)
    return (
        f"What is the latitude and longitude for {place}? "
        'Provide the answer in JSON format as {"latitude": number, "longitude": number}'
    )


def strip_code_fences(text: str) -> str:
    """Remove markdown fence markers (```` ``` ```` or ```` ```json ````) from ``text``."""

    return _FENCE.sub("", text).strip()


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_coordinates(text: str) -> GeoCoordinate:
    """Parse Gemini's (possibly fenced) JSON answer into a coordinate."""

    cleaned = strip_code_fences(text)
    logger.debug("Location response from Gemini", extra={"response_text": cleaned})

    try:
        data = json.loads(cleaned)
    except ValueError as exc:
        logger.error("Location response is not JSON", extra={"response_text": cleaned})
        raise GeocodeParseError(SCHEMA_ERROR) from exc

    if not isinstance(data, dict):
        raise GeocodeParseError(SCHEMA_ERROR)

    latitude = data.get("latitude")
    longitude = data.get("longitude")
    if not (_is_number(latitude) and _is_number(longitude)):
        logger.error("Location response lacks coordinates", extra={"raw_response": data})
        raise GeocodeParseError(SCHEMA_ERROR)

    return GeoCoordinate(latitude=latitude, longitude=longitude)
