"""Custom exceptions shared across services and command handlers."""

from dataclasses import dataclass


@dataclass(eq=False)
class ServiceError(Exception):
    """Base exception for failures surfaced to the invoking Discord user."""

    message: str
    code: str = "service_error"
    status_code: int | None = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


@dataclass(eq=False)
class ValidationError(ServiceError):
    """Raised when a required command option is empty."""

    code: str = "validation_error"


@dataclass(eq=False)
class EmptyResponseError(ServiceError):
    """Raised when Gemini answers without any text."""

    code: str = "empty_response"


@dataclass(eq=False)
class GeocodeParseError(ServiceError):
    """Raised when Gemini's coordinate answer is malformed or incomplete."""

    code: str = "geocode_parse_error"


@dataclass(eq=False)
class WeatherFetchError(ServiceError):
    """Raised when OpenWeatherMap returns no current conditions."""

    code: str = "weather_fetch_error"


@dataclass(eq=False)
class WeatherLookupError(ServiceError):
    """Single wrapping error for any failure of the weather orchestration."""

    code: str = "weather_lookup_error"


@dataclass(eq=False)
class TransportError(ServiceError):
    """Raised when an outbound HTTP call fails or returns garbage."""

    code: str = "transport_error"


@dataclass(eq=False)
class DiscordApiError(TransportError):
    """Raised when Discord's REST API rejects a call."""

    code: str = "discord_error"
