"""Ed25519 verification of Discord interaction requests."""

from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey


def verify_signature(public_key: str, signature: str | None, timestamp: str | None, body: bytes) -> bool:
    """Return whether ``signature`` signs ``timestamp + body`` for ``public_key`` (hex)."""

    if not signature or not timestamp:
        return False

    try:
        key = Ed25519PublicKey.from_public_bytes(bytes.fromhex(public_key))
        key.verify(bytes.fromhex(signature), timestamp.encode() + body)
    except (InvalidSignature, ValueError):
        return False

    return True
