"""Asynchronous codec operations.

Every operation is a coroutine function: argument checks run inside the
coroutine, so all failures surface when the result is awaited and callers
handle a single error path. Each call builds its own cipher, hash and
random state.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import Union, cast

from crypto_codec.codec.envelope import Envelope
from crypto_codec.crypto.asymmetric import KeyPair, generate_key_pair_sync, rsa_decrypt, rsa_encrypt
from crypto_codec.crypto.digest import Sha256Context
from crypto_codec.crypto.entropy import random_bytes_raw, random_hex
from crypto_codec.crypto.kdf import derive_key_bytes
from crypto_codec.crypto.streaming import DEFAULT_CHUNK_SIZE, consume, validate_chunk_size
from crypto_codec.crypto.symmetric import CipherAlgorithm
from crypto_codec.errors import SymmetricDecryptionFailed

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]

DEFAULT_ALGORITHM = CipherAlgorithm.AES_CBC


async def derive_key(password: str, salt: str) -> str:
    """Derive a 64 character hex key from ``password`` and ``salt``."""

    key = await asyncio.to_thread(derive_key_bytes, password, salt)
    return key.hex()


async def generate_key_pair(bit_length: int) -> KeyPair:
    """Generate an RSA key pair with a ``bit_length`` modulus off the event loop."""

    logger.debug("Generating %d-bit RSA key pair", bit_length)
    return await asyncio.to_thread(generate_key_pair_sync, bit_length)


async def random_bytes(length: int) -> str:
    """Return ``length`` secure random bytes as hex."""

    return random_hex(length)


def _encode_text(text: str, encode_as_utf8: bool) -> bytes:
    if encode_as_utf8:
        return base64.b64encode(text.encode("utf-8"))
    return text.encode("latin-1")


def _decode_text(raw: bytes, decode_as_utf8: bool) -> str:
    if not decode_as_utf8:
        return raw.decode("latin-1")
    try:
        return base64.b64decode(raw, validate=True).decode("utf-8")
    except ValueError as exc:
        # Padding happened to check out but the plaintext is not ours.
        raise SymmetricDecryptionFailed() from exc


async def encrypt(
    data: Union[str, BytesLike],
    key: str,
    encode_as_utf8: bool = True,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Encrypt text or bytes into an ``AES-CBC:<iv>:<ciphertext>`` envelope.

    Text is UTF-8 and base64 encoded first when ``encode_as_utf8`` is set,
    otherwise each character becomes one byte. Bytes are encrypted as is.
    A fresh IV is drawn for every call.
    """

    step = validate_chunk_size(chunk_size)
    plaintext = _encode_text(data, encode_as_utf8) if isinstance(data, str) else bytes(data)

    algorithm = DEFAULT_ALGORITHM
    iv = random_bytes_raw(algorithm.iv_length)
    context = algorithm.encryptor(bytes.fromhex(key), iv)
    logger.debug("Encrypting %d bytes with %s", len(plaintext), algorithm.value)
    ciphertext = await consume(context, plaintext, step)
    return Envelope(algorithm=algorithm, iv=iv, ciphertext_hex=ciphertext.hex()).serialize()


async def decrypt(
    envelope: str,
    key: str,
    decode_as_utf8: bool | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Union[str, bytes]:
    """Decrypt an envelope produced by :func:`encrypt`.

    With ``decode_as_utf8`` left as ``None`` the raw plaintext bytes are
    returned; ``True`` or ``False`` must match the flag used to encrypt and
    yields text. ``chunk_size`` counts ciphertext bytes, so the hex text is
    walked ``2 * chunk_size`` characters at a time.
    """

    step = validate_chunk_size(chunk_size)
    parsed = Envelope.parse(envelope)
    context = parsed.algorithm.decryptor(bytes.fromhex(key), parsed.iv)
    logger.debug("Decrypting %d hex digits with %s", len(parsed.ciphertext_hex), parsed.algorithm.value)
    plaintext = await consume(context, parsed.ciphertext_hex, step * 2)
    if decode_as_utf8 is None:
        return plaintext
    return _decode_text(plaintext, decode_as_utf8)


async def encrypt_string(
    text: str, key: str, encode_as_utf8: bool = True, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> str:
    return await encrypt(text, key, encode_as_utf8, chunk_size)


async def encrypt_binary(data: BytesLike, key: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    return await encrypt(bytes(data), key, False, chunk_size)


async def decrypt_to_string(
    envelope: str, key: str, decode_as_utf8: bool = True, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> str:
    return cast(str, await decrypt(envelope, key, bool(decode_as_utf8), chunk_size))


async def decrypt_binary(envelope: str, key: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    return cast(bytes, await decrypt(envelope, key, None, chunk_size))


async def asymmetric_encrypt(data: str, public_key: str) -> str:
    """RSA-encrypt a short string with a PEM public key; returns hex."""

    return rsa_encrypt(data, public_key)


async def asymmetric_decrypt(data: str, private_key: str) -> str:
    """Inverse of :func:`asymmetric_encrypt` using the matching PEM private key."""

    return rsa_decrypt(data, private_key)


async def digest(data: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """SHA-256 of the UTF-8 encoding of ``data``, as lowercase hex."""

    step = validate_chunk_size(chunk_size)
    return await consume(Sha256Context(), data.encode("utf-8"), step)


__all__ = [
    "BytesLike",
    "DEFAULT_ALGORITHM",
    "asymmetric_decrypt",
    "asymmetric_encrypt",
    "decrypt",
    "decrypt_binary",
    "decrypt_to_string",
    "derive_key",
    "digest",
    "encrypt",
    "encrypt_binary",
    "encrypt_string",
    "generate_key_pair",
    "random_bytes",
]
