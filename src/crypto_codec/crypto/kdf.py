"""Password based key derivation using PBKDF2."""

from __future__ import annotations

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from crypto_codec.errors import KeyDerivationFailed

PBKDF2_ITERATIONS = 2000
DERIVED_KEY_LEN = 32


def derive_key_bytes(password: str, salt: str) -> bytes:
    """Derive a 256-bit key from ``password`` and ``salt``.

    HMAC-SHA1 is the PRF, which keeps keys derived by existing clients
    reproducible. Iteration count and output length are fixed.
    """

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA1(),
        length=DERIVED_KEY_LEN,
        salt=salt.encode("utf-8"),
        iterations=PBKDF2_ITERATIONS,
    )
    try:
        key = kdf.derive(password.encode("utf-8"))
    except Exception as exc:  # noqa: BLE001
        raise KeyDerivationFailed("Key not derived") from exc
    if len(key) != DERIVED_KEY_LEN:
        raise KeyDerivationFailed("Key not derived")
    return key
