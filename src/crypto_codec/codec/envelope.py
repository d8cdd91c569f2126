"""Symmetric envelope format helpers.

An envelope is ``<algorithm>:<iv-hex>:<ciphertext-hex>``. The format carries
no version field; a new layout means a new algorithm name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from crypto_codec.crypto.symmetric import CipherAlgorithm
from crypto_codec.errors import MalformedEnvelope

ENVELOPE_SEPARATOR = ":"
ENVELOPE_FIELDS = 3

_HEX_BYTES = re.compile(r"(?:[0-9a-fA-F]{2})+")


def is_hex_bytes(value: str) -> bool:
    """True for a non-empty, even-length hex string."""

    return _HEX_BYTES.fullmatch(value) is not None


@dataclass(frozen=True)
class Envelope:
    algorithm: CipherAlgorithm
    iv: bytes
    ciphertext_hex: str

    @classmethod
    def parse(cls, text: str) -> Envelope:
        fields = text.split(ENVELOPE_SEPARATOR)
        if len(fields) != ENVELOPE_FIELDS or not all(fields):
            raise MalformedEnvelope()
        algorithm_name, iv_hex, ciphertext_hex = fields

        algorithm = CipherAlgorithm.from_name(algorithm_name)

        if not is_hex_bytes(iv_hex) or len(iv_hex) != algorithm.iv_length * 2:
            raise MalformedEnvelope()
        if not is_hex_bytes(ciphertext_hex):
            raise MalformedEnvelope()

        return cls(algorithm=algorithm, iv=bytes.fromhex(iv_hex), ciphertext_hex=ciphertext_hex.lower())

    def serialize(self) -> str:
        return ENVELOPE_SEPARATOR.join((self.algorithm.value, self.iv.hex(), self.ciphertext_hex))

    def __str__(self) -> str:
        return self.serialize()


__all__ = ["ENVELOPE_FIELDS", "ENVELOPE_SEPARATOR", "Envelope", "is_hex_bytes"]
