"""Application settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strongly typed bot configuration.

    The three service credentials and the Discord public key are required;
    building ``Settings()`` without them raises, which stops the app factory.
    """

    google_api_key: str = Field(alias="GOOGLE_API_KEY")
    discord_bot_token: str = Field(alias="DISCORD_BOT_TOKEN")
    openweathermap_api_key: str = Field(alias="OPENWEATHERMAP_API_KEY")
    discord_public_key: str = Field(alias="DISCORD_PUBLIC_KEY")
    discord_application_id: str | None = Field(default=None, alias="DISCORD_APPLICATION_ID")

    gemini_model: str = Field(default="gemini-2.0-flash", alias="GEMINI_MODEL")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta", alias="GEMINI_BASE_URL"
    )
    geocode_json_mode: bool = Field(default=True, alias="GEOCODE_JSON_MODE")
    discord_api_url: str = Field(default="https://discord.com/api/v10", alias="DISCORD_API_URL")
    weather_api_url: str = Field(
        default="https://api.openweathermap.org/data/3.0/onecall", alias="WEATHER_API_URL"
    )

    gemini_timeout: float = Field(default=30.0, alias="GEMINI_TIMEOUT", description="Seconds")
    weather_timeout: float = Field(default=10.0, alias="WEATHER_TIMEOUT")
    discord_timeout: float = Field(default=10.0, alias="DISCORD_TIMEOUT")

    register_commands_on_startup: bool = Field(
        default=False, alias="REGISTER_COMMANDS_ON_STARTUP"
    )
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", alias="LOG_LEVEL"
    )
    port: int = Field(default=8000, alias="PORT")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of settings."""

    return Settings()
