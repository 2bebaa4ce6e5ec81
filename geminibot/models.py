"""Pydantic models shared across application layers."""

from enum import IntEnum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class AskCommand(BaseModel):
    """``/ask`` invocation: a free-text question for Gemini."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["ask"] = "ask"
    prompt: str = ""


class WeatherCommand(BaseModel):
    """``/weather`` invocation: a place to geocode and look up."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["weather"] = "weather"
    city: str = ""
    region: str | None = None
    country: str | None = None


CommandRequest = Annotated[Union[AskCommand, WeatherCommand], Field(discriminator="kind")]


class GeoCoordinate(BaseModel):
    """Latitude/longitude pair resolved by the geocoding step."""

    latitude: float
    longitude: float


class WeatherSummary(BaseModel):
    """Current conditions reduced to what the reply template shows."""

    temperature_f: int
    description: str
    humidity_pct: int
    wind_speed_ms: float


class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2


class InteractionCallbackType(IntEnum):
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5


EPHEMERAL_FLAG = 1 << 6


class DiscordUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    username: str
    global_name: str | None = None


class GuildMember(BaseModel):
    model_config = ConfigDict(extra="ignore")

    user: DiscordUser


class CommandOption(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    type: int
    value: Any = None


class CommandData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    options: list[CommandOption] = Field(default_factory=list)

    def option(self, name: str) -> str | None:
        """Return the string value of option ``name`` if it was supplied."""

        for item in self.options:
            if item.name == name and item.value is not None:
                return str(item.value)
        return None


class Interaction(BaseModel):
    """Subset of Discord's interaction payload the bot reads."""

    model_config = ConfigDict(extra="ignore")

    id: str
    application_id: str
    type: int
    token: str
    data: CommandData | None = None
    member: GuildMember | None = None
    user: DiscordUser | None = None

    @property
    def invoker(self) -> DiscordUser | None:
        """User who ran the command, in a guild (``member``) or a DM (``user``)."""

        if self.member is not None:
            return self.member.user
        return self.user


class ErrorResponse(BaseModel):
    """Error body returned for rejected interaction requests."""

    error: str
    detail: str | None = None
