"""The reply channel a command handler talks through."""

from __future__ import annotations

import asyncio
from typing import Any, Protocol

from geminibot.models import EPHEMERAL_FLAG, Interaction, InteractionCallbackType
from geminibot.services.discord_client import DiscordClient


class Responder(Protocol):
    """Acknowledge-then-edit-then-follow-up protocol for one command."""

    async def reject(self, content: str) -> None:
        """Answer immediately with a short-lived notice; nothing else follows."""

    async def acknowledge(self) -> None:
        """Send the deferred "processing" placeholder."""

    async def edit(self, content: str) -> None:
        """Replace the placeholder with ``content``."""

    async def follow_up(self, content: str) -> None:
        """Send one more message after the edited placeholder."""


class InteractionResponder:
    """Responder bound to one Discord interaction received over HTTP.

    ``reject`` and ``acknowledge`` resolve :attr:`initial_response`, the body
    the interactions endpoint returns to Discord. ``edit`` and ``follow_up``
    go through the webhook REST API afterwards.
    """

    def __init__(self, discord: DiscordClient, interaction: Interaction) -> None:
        self._discord = discord
        self._interaction = interaction
        self.initial_response: asyncio.Future[dict[str, Any]] = (
            asyncio.get_running_loop().create_future()
        )

    def _resolve(self, body: dict[str, Any]) -> None:
        if self.initial_response.done():
            raise RuntimeError("Interaction already has an initial response")
        self.initial_response.set_result(body)

    async def reject(self, content: str) -> None:
        self._resolve(
            {
                "type": InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE,
                "data": {"content": content, "flags": EPHEMERAL_FLAG},
            }
        )

    async def acknowledge(self) -> None:
        self._resolve({"type": InteractionCallbackType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE})
        # Let the endpoint hand the acknowledgement back before any webhook call.
        await asyncio.sleep(0)

    async def edit(self, content: str) -> None:
        await self._discord.edit_original_response(
            self._interaction.application_id, self._interaction.token, content
        )

    async def follow_up(self, content: str) -> None:
        await self._discord.create_followup(
            self._interaction.application_id, self._interaction.token, content
        )
