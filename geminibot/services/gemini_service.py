"""Adapter for the Gemini ``generateContent`` REST endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from geminibot.config import Settings
from geminibot.exceptions import EmptyResponseError, TransportError

logger = logging.getLogger(__name__)


class GeminiService:
    """Wrapper around Google's generative-language API."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings

    @property
    def endpoint(self) -> str:
        return f"{self._settings.gemini_base_url}/models/{self._settings.gemini_model}:generateContent"

    async def generate(self, prompt: str, *, json_output: bool = False) -> str:
        """Send ``prompt`` to Gemini and return the answer text.

        With ``json_output`` the model is asked for an ``application/json``
        response instead of free text.
        """

        payload: dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        if json_output:
            payload["generationConfig"] = {"responseMimeType": "application/json"}

        headers = {
            "x-goog-api-key": self._settings.google_api_key,
            "Content-Type": "application/json",
        }

        try:
            response = await self._client.post(
                self.endpoint,
                headers=headers,
                json=payload,
                timeout=self._settings.gemini_timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Gemini request timed out", exc_info=exc)
            raise TransportError("Gemini request timed out") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Gemini request failed",
                extra={
                    "status_code": exc.response.status_code,
                    "response_text": exc.response.text,
                },
            )
            raise TransportError(
                f"Gemini returned HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.exception("Unexpected Gemini HTTP error")
            raise TransportError(f"Gemini request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Gemini response is not JSON", extra={"response_text": response.text})
            raise TransportError("Invalid Gemini response payload") from exc

        text = _extract_text(data)
        if not text:
            feedback = data.get("promptFeedback") if isinstance(data, dict) else None
            logger.warning("Gemini returned no text", extra={"prompt_feedback": feedback})
            raise EmptyResponseError("Gemini returned an empty response.")

        return text


def _extract_text(data: Any) -> str:
    """Concatenate the text parts of the first candidate, or ``""``."""

    try:
        parts = data["candidates"][0]["content"]["parts"]
        texts = [part.get("text") for part in parts if isinstance(part, dict)]
    except (KeyError, IndexError, TypeError):
        return ""

    return "".join(text for text in texts if isinstance(text, str))
