"""Cryptographically secure random bytes."""

from __future__ import annotations

import os

from crypto_codec.errors import RandomSourceExhausted


def random_bytes_raw(length: int) -> bytes:
    """Return ``length`` bytes from the operating system CSPRNG."""

    if length < 0:
        raise ValueError(f"Random byte count must not be negative, got {length}")
    try:
        return os.urandom(length)
    except (OSError, NotImplementedError) as exc:
        raise RandomSourceExhausted("Random source could not supply bytes") from exc


def random_hex(length: int) -> str:
    return random_bytes_raw(length).hex()
