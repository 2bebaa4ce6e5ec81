"""Register the bot's slash commands with Discord from the command line."""

from __future__ import annotations

import argparse
import asyncio
import logging

import httpx

from geminibot.config import Settings, get_settings
from geminibot.services.discord_client import DiscordClient


async def run_registration(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> list[dict]:
    """Overwrite the global application commands and return Discord's copy."""

    logger = logging.getLogger("register_commands")

    async with httpx.AsyncClient(transport=transport) as client:
        commands = await DiscordClient(client, settings).register_commands()

    for command in commands:
        logger.info("Registered /%s (id %s)", command.get("name"), command.get("id"))
    return commands


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Register /ask and /weather with Discord.")
    parser.add_argument(
        "--application-id",
        help="Discord application id (default: DISCORD_APPLICATION_ID or looked up via the bot token).",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    settings = get_settings()
    if args.application_id:
        settings = settings.model_copy(update={"discord_application_id": args.application_id})

    asyncio.run(run_registration(settings))


if __name__ == "__main__":  # pragma: no cover
    main()
