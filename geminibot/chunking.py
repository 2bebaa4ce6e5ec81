"""Split long replies into Discord-sized messages."""

from __future__ import annotations

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)

DISCORD_MESSAGE_LIMIT = 2000
CHUNK_LENGTH = 1990
CONTINUATION_NOTICE = "[... continued below]"
ELLIPSIS = "..."


def split_message(message: str, max_length: int) -> list[str]:
    """Greedily pack space-separated words into chunks of at most ``max_length``.

    Splits happen only on the single-space separator, so ``" ".join(chunks)``
    gives back ``message``; only an empty message yields no chunks. A word
    longer than ``max_length`` is kept whole in a chunk of its own.
    """

    chunks: list[str] = []
    current: str | None = None

    for word in message.split(" "):
        if current is None:
            current = word
        elif len(current) + len(word) + 1 <= max_length:
            current = f"{current} {word}"
        else:
            chunks.append(current)
            current = word

    if current is not None and (current or chunks):
        chunks.append(current)

    return chunks


def add_continuation_notices(
    chunks: Iterable[str],
    limit: int = DISCORD_MESSAGE_LIMIT,
    notice: str = CONTINUATION_NOTICE,
) -> list[str]:
    """Append ``notice`` to every chunk but the last when it still fits in ``limit``."""

    items = list(chunks)
    marked: list[str] = []

    for index, chunk in enumerate(items):
        if index < len(items) - 1:
            if len(chunk) + len(notice) + 1 <= limit:
                chunk = f"{chunk} {notice}"
            else:
                logger.warning(
                    "Continuation notice does not fit; sending chunk without it",
                    extra={"chunk_index": index, "chunk_length": len(chunk), "limit": limit},
                )
        marked.append(chunk)

    return marked


def enforce_limit(text: str, limit: int = DISCORD_MESSAGE_LIMIT) -> str:
    """Last-resort truncation of ``text`` to ``limit`` characters. Lossy."""

    if len(text) <= limit:
        return text

    logger.error(
        "Message exceeds platform limit; truncating",
        extra={"length": len(text), "limit": limit},
    )
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def prepare_follow_ups(text: str) -> list[str]:
    """Turn a Gemini answer into the ordered follow-up messages to send."""

    chunks = [chunk for chunk in split_message(text, CHUNK_LENGTH) if chunk.strip()]
    return [enforce_limit(chunk) for chunk in add_continuation_notices(chunks)]
