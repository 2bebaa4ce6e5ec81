"""Adapter for the parts of Discord's REST API the bot uses."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from geminibot.config import Settings
from geminibot.exceptions import DiscordApiError

logger = logging.getLogger(__name__)

STRING_OPTION = 3

COMMANDS: list[dict[str, Any]] = [
    {
        "name": "ask",
        "description": "Ask Gemini a question.",
        "options": [
            {
                "type": STRING_OPTION,
                "name": "prompt",
                "description": "The question to ask Gemini",
                "required": True,
            }
        ],
    },
    {
        "name": "weather",
        "description": "Get the current weather for a city (optional region and country).",
        "options": [
            {
                "type": STRING_OPTION,
                "name": "city",
                "description": "The city to get weather for.",
                "required": True,
            },
            {
                "type": STRING_OPTION,
                "name": "region",
                "description": "The state or region (optional).",
                "required": False,
            },
            {
                "type": STRING_OPTION,
                "name": "country",
                "description": "The country (optional).",
                "required": False,
            },
        ],
    },
]


class DiscordClient:
    """Wrapper around Discord's webhook and application-command endpoints."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings

    @property
    def _bot_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bot {self._settings.discord_bot_token}"}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        authorized: bool = False,
        json: Any = None,
    ) -> httpx.Response:
        try:
            response = await self._client.request(
                method,
                f"{self._settings.discord_api_url}{path}",
                headers=self._bot_headers if authorized else None,
                json=json,
                timeout=self._settings.discord_timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Discord request timed out", exc_info=exc, extra={"method": method})
            raise DiscordApiError("Discord request timed out") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Discord request failed",
                extra={
                    "method": method,
                    "status_code": exc.response.status_code,
                    "response_text": exc.response.text,
                },
            )
            raise DiscordApiError(
                "Discord returned an error",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.exception("Unexpected Discord HTTP error")
            raise DiscordApiError("Discord request failed") from exc

        return response

    async def edit_original_response(self, application_id: str, token: str, content: str) -> None:
        """Replace the deferred acknowledgement of an interaction."""

        await self._request(
            "PATCH",
            f"/webhooks/{application_id}/{token}/messages/@original",
            json={"content": content},
        )

    async def create_followup(self, application_id: str, token: str, content: str) -> None:
        """Send an additional message after the original response."""

        await self._request(
            "POST",
            f"/webhooks/{application_id}/{token}",
            json={"content": content},
        )

    async def fetch_application_id(self) -> str:
        response = await self._request("GET", "/applications/@me", authorized=True)
        return str(response.json()["id"])

    async def register_commands(self) -> list[dict[str, Any]]:
        """Overwrite the global slash commands with ``ask`` and ``weather``."""

        application_id = self._settings.discord_application_id or await self.fetch_application_id()
        logger.info("Started refreshing application commands", extra={"application_id": application_id})
        response = await self._request(
            "PUT",
            f"/applications/{application_id}/commands",
            authorized=True,
            json=COMMANDS,
        )
        logger.info("Successfully reloaded application commands")
        return response.json()
