"""Dependency providers for the FastAPI application."""

import httpx
from fastapi import Depends
from starlette.requests import HTTPConnection

from geminibot.config import Settings, get_settings
from geminibot.handlers import CommandHandler
from geminibot.services.discord_client import DiscordClient
from geminibot.services.gemini_service import GeminiService
from geminibot.services.weather_service import WeatherService
from geminibot.weather_lookup import WeatherLookup


async def get_http_client(connection: HTTPConnection) -> httpx.AsyncClient:
    """Retrieve the shared AsyncClient from application state."""

    return connection.app.state.http_client  # type: ignore[return-value]


async def get_discord_client(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> DiscordClient:
    return DiscordClient(client=client, settings=settings)


async def get_command_handler(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> CommandHandler:
    """Dependency provider wiring Gemini and OpenWeatherMap into a CommandHandler."""

    gemini = GeminiService(client=client, settings=settings)
    weather = WeatherService(client=client, settings=settings)
    lookup = WeatherLookup(gemini, weather, json_mode=settings.geocode_json_mode)
    return CommandHandler(gemini=gemini, weather_lookup=lookup)
