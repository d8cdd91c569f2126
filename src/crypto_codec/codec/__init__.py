"""Public codec API re-exported for external users.

The objects listed in ``__all__`` form the supported call surface. The
streaming primitive and the incremental contexts in :mod:`crypto_codec.crypto`
are internal and may change without notice.
"""
from __future__ import annotations

from crypto_codec.codec.api import (
    asymmetric_decrypt,
    asymmetric_encrypt,
    decrypt,
    decrypt_binary,
    decrypt_to_string,
    derive_key,
    digest,
    encrypt,
    encrypt_binary,
    encrypt_string,
    generate_key_pair,
    random_bytes,
)
from crypto_codec.codec.envelope import ENVELOPE_SEPARATOR, Envelope
from crypto_codec.codec.files import EncryptedFile, decrypt_file, encrypt_file
from crypto_codec.crypto.asymmetric import KeyPair
from crypto_codec.crypto.kdf import DERIVED_KEY_LEN, PBKDF2_ITERATIONS
from crypto_codec.crypto.streaming import DEFAULT_CHUNK_SIZE
from crypto_codec.crypto.symmetric import CipherAlgorithm

__all__ = [
    "CipherAlgorithm",
    "DEFAULT_CHUNK_SIZE",
    "DERIVED_KEY_LEN",
    "ENVELOPE_SEPARATOR",
    "EncryptedFile",
    "Envelope",
    "KeyPair",
    "PBKDF2_ITERATIONS",
    "asymmetric_decrypt",
    "asymmetric_encrypt",
    "decrypt",
    "decrypt_binary",
    "decrypt_file",
    "decrypt_to_string",
    "derive_key",
    "digest",
    "encrypt",
    "encrypt_binary",
    "encrypt_file",
    "encrypt_string",
    "generate_key_pair",
    "random_bytes",
]
