"""SHA-256 digest helpers."""

from __future__ import annotations

import hashlib


class Sha256Context:
    def __init__(self) -> None:
        self._hasher = hashlib.sha256()

    def update(self, piece: bytes) -> None:
        self._hasher.update(piece)

    def finalize(self) -> str:
        return self._hasher.hexdigest()


def digest_bytes(data: bytes) -> str:
    """Hash ``data`` in one step and return the lowercase hex digest."""

    return hashlib.sha256(data).hexdigest()
