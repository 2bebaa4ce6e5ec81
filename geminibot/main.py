"""FastAPI application entrypoint."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import Depends, FastAPI

from geminibot import __version__
from geminibot.config import Settings, get_settings
from geminibot.exceptions import DiscordApiError
from geminibot.interactions import interactions_endpoint
from geminibot.logging import configure_logging
from geminibot.services.discord_client import DiscordClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create application resources during startup and clean up on shutdown."""

    settings = get_settings()
    async with httpx.AsyncClient(transport=app.state.http_transport) as client:
        app.state.http_client = client

        if settings.register_commands_on_startup:
            try:
                await DiscordClient(client, settings).register_commands()
            except (DiscordApiError, KeyError, ValueError):
                logger.exception("Command registration failed")

        yield

        if app.state.tasks:
            await asyncio.gather(*app.state.tasks, return_exceptions=True)
        del app.state.http_client


def create_app(transport: httpx.AsyncBaseTransport | None = None) -> FastAPI:
    """Application factory.

    ``transport`` replaces the network transport of the shared HTTP client.
    """

    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Gemini Discord Bot",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.tasks = set()
    app.state.http_transport = transport

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/version")
    async def version(settings: Settings = Depends(get_settings)) -> dict[str, str]:
        return {"version": __version__, "environment": settings.environment}

    app.add_api_route(
        "/interactions", interactions_endpoint, methods=["POST"], response_model=None
    )

    return app


app = create_app()
