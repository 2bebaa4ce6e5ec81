"""Slash-command handlers: ``/ask`` and ``/weather``."""

from __future__ import annotations

import logging

from geminibot.chunking import enforce_limit, prepare_follow_ups
from geminibot.exceptions import EmptyResponseError, ServiceError, ValidationError
from geminibot.models import AskCommand, CommandRequest, WeatherCommand
from geminibot.responder import Responder
from geminibot.services.gemini_service import GeminiService
from geminibot.weather_lookup import WeatherLookup

logger = logging.getLogger(__name__)

EMPTY_PROMPT_NOTICE = "Please provide a prompt."
EMPTY_CITY_NOTICE = "Please provide a city name."
EMPTY_RESPONSE_NOTICE = "Gemini returned an empty response."


def validate(command: CommandRequest) -> None:
    """Raise :class:`ValidationError` when a required option is blank."""

    if isinstance(command, AskCommand) and not command.prompt.strip():
        raise ValidationError(EMPTY_PROMPT_NOTICE)
    if isinstance(command, WeatherCommand) and not command.city.strip():
        raise ValidationError(EMPTY_CITY_NOTICE)


class CommandHandler:
    """Runs one command from validation to its last follow-up message."""

    def __init__(self, gemini: GeminiService, weather_lookup: WeatherLookup) -> None:
        self._gemini = gemini
        self._weather_lookup = weather_lookup

    async def handle(self, command: CommandRequest, username: str, responder: Responder) -> None:
        try:
            validate(command)
        except ValidationError as exc:
            logger.info("Rejected command", extra={"kind": command.kind, "reason": exc.message})
            await responder.reject(exc.message)
            return

        await responder.acknowledge()

        if isinstance(command, AskCommand):
            await self.ask(command, username, responder)
        else:
            await self.weather(command, responder)

    async def ask(self, command: AskCommand, username: str, responder: Responder) -> None:
        try:
            answer = await self._gemini.generate(command.prompt)

            await responder.edit(enforce_limit(f'{username} asked: "{command.prompt}"'))

            follow_ups = prepare_follow_ups(answer)
            for chunk in follow_ups:
                await responder.follow_up(chunk)
        except EmptyResponseError:
            await responder.edit(EMPTY_RESPONSE_NOTICE)
            return
        except ServiceError as exc:
            logger.error("Gemini API error", extra={"code": exc.code, "detail": exc.message})
            await responder.edit(f"An error occurred while communicating with Gemini: {exc.message}")
            return

        logger.info(
            "Answer delivered",
            extra={"user": username, "answer_length": len(answer), "messages": len(follow_ups)},
        )

    async def weather(self, command: WeatherCommand, responder: Responder) -> None:
        try:
            reply = await self._weather_lookup.lookup(command)
            await responder.edit(reply)
        except ServiceError as exc:
            await responder.edit(
                f"An error occurred while fetching the weather for {command.city}: {exc.message}"
            )
            return

        logger.info("Weather delivered", extra={"city": command.city})
