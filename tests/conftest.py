"""Shared pytest fixtures."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

SIGNING_KEY = Ed25519PrivateKey.generate()
PUBLIC_KEY_HEX = SIGNING_KEY.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw).hex()

TEST_ENV = {
    "GOOGLE_API_KEY": "test-google-key",
    "DISCORD_BOT_TOKEN": "test-bot-token",
    "OPENWEATHERMAP_API_KEY": "test-owm-key",
    "DISCORD_PUBLIC_KEY": PUBLIC_KEY_HEX,
    "DISCORD_APPLICATION_ID": "1234",
    "ENVIRONMENT": "test",
}

for _key, _value in TEST_ENV.items():
    os.environ[_key] = _value

from geminibot.config import Settings, get_settings  # noqa: E402
from geminibot.main import create_app  # noqa: E402


@pytest.fixture(autouse=True)
def configure_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure required environment variables are present during tests."""

    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("REGISTER_COMMANDS_ON_STARTUP", raising=False)
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def app():
    return create_app()


class FakeResponder:
    """Records every call a command handler makes on its responder."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str | None]] = []

    async def reject(self, content: str) -> None:
        self.calls.append(("reject", content))

    async def acknowledge(self) -> None:
        self.calls.append(("acknowledge", None))

    async def edit(self, content: str) -> None:
        self.calls.append(("edit", content))

    async def follow_up(self, content: str) -> None:
        self.calls.append(("follow_up", content))

    def contents(self, kind: str) -> list[str | None]:
        return [content for name, content in self.calls if name == kind]


@pytest.fixture
def responder() -> FakeResponder:
    return FakeResponder()


@pytest.fixture
def signed_headers():
    """Build Discord-style signature headers for a request body."""

    def sign(body: bytes, timestamp: str = "1700000000") -> dict[str, str]:
        signature = SIGNING_KEY.sign(timestamp.encode() + body).hex()
        return {
            "X-Signature-Ed25519": signature,
            "X-Signature-Timestamp": timestamp,
            "Content-Type": "application/json",
        }

    return sign
