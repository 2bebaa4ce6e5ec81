"""HTTP endpoint receiving Discord interactions."""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Annotated, Any

from fastapi import Depends, Request, status
from fastapi.responses import JSONResponse

from geminibot.config import Settings, get_settings
from geminibot.dependencies import get_command_handler, get_discord_client
from geminibot.handlers import CommandHandler
from geminibot.models import (
    AskCommand,
    CommandRequest,
    ErrorResponse,
    Interaction,
    InteractionCallbackType,
    InteractionType,
    WeatherCommand,
)
from geminibot.responder import InteractionResponder
from geminibot.services.discord_client import DiscordClient
from geminibot.signature import verify_signature

logger = logging.getLogger(__name__)

FALLBACK_USERNAME = "Someone"


def parse_command(interaction: Interaction) -> CommandRequest | None:
    """Map an application-command interaction onto one of the known commands."""

    data = interaction.data
    if data is None:
        return None

    if data.name == "ask":
        return AskCommand(prompt=data.option("prompt") or "")
    if data.name == "weather":
        return WeatherCommand(
            city=data.option("city") or "",
            region=data.option("region"),
            country=data.option("country"),
        )
    return None


async def interactions_endpoint(
    request: Request,
    handler: Annotated[CommandHandler, Depends(get_command_handler)],
    discord: Annotated[DiscordClient, Depends(get_discord_client)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Any:
    """Verify, parse and dispatch one interaction; return its initial response."""

    body = await request.body()
    if not verify_signature(
        settings.discord_public_key,
        request.headers.get("X-Signature-Ed25519"),
        request.headers.get("X-Signature-Timestamp"),
        body,
    ):
        logger.warning("Rejected interaction with invalid signature")
        return _error(status.HTTP_401_UNAUTHORIZED, "invalid_signature", "Bad request signature.")

    try:
        interaction = Interaction.model_validate_json(body)
    except ValueError:
        return _error(status.HTTP_400_BAD_REQUEST, "invalid_payload", "Invalid interaction payload.")

    if interaction.type == InteractionType.PING:
        return {"type": InteractionCallbackType.PONG}

    if interaction.type != InteractionType.APPLICATION_COMMAND:
        return _error(
            status.HTTP_400_BAD_REQUEST,
            "unsupported_interaction",
            f"Interaction type {interaction.type} is not handled.",
        )

    command = parse_command(interaction)
    if command is None:
        name = interaction.data.name if interaction.data else None
        return _error(status.HTTP_400_BAD_REQUEST, "unknown_command", f"Unknown command {name!r}.")

    invoker = interaction.invoker
    username = invoker.username if invoker else FALLBACK_USERNAME
    logger.info(
        "Command received",
        extra={"kind": command.kind, "user": username, "interaction_id": interaction.id},
    )

    responder = InteractionResponder(discord, interaction)
    tasks: set[asyncio.Task[None]] = request.app.state.tasks
    task = asyncio.create_task(handler.handle(command, username, responder))
    tasks.add(task)
    task.add_done_callback(partial(_command_finished, tasks, responder))

    return await responder.initial_response


def _command_finished(
    tasks: set[asyncio.Task[None]],
    responder: InteractionResponder,
    task: asyncio.Task[None],
) -> None:
    """Forget a finished command task and surface a crash to the waiting endpoint."""

    tasks.discard(task)
    exc = None if task.cancelled() else task.exception()
    if exc is not None:
        logger.error("Command handler crashed", exc_info=exc)

    if not responder.initial_response.done():
        responder.initial_response.set_exception(
            exc or RuntimeError("Command finished without an initial response")
        )


def _error(status_code: int, error: str, detail: str) -> JSONResponse:
    return JSONResponse(
        ErrorResponse(error=error, detail=detail).model_dump(),
        status_code=status_code,
    )
