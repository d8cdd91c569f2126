from __future__ import annotations

import re

import pytest

from crypto_codec.codec import (
    Envelope,
    decrypt,
    decrypt_binary,
    decrypt_to_string,
    encrypt,
    encrypt_binary,
    encrypt_string,
)
from crypto_codec.errors import (
    DecryptionError,
    ErrorKind,
    InvalidChunkSize,
    MalformedEnvelope,
    SymmetricDecryptionFailed,
)

ENVELOPE_PATTERN = re.compile(r"AES-CBC:[a-f0-9]+:[a-f0-9]+")
EXAMPLE_TEXT = "FooBar ^& 123 łąć 🦫"
EXAMPLE_LATIN_TEXT = "Baz Qux 135 !#%&"
EXAMPLE_BINARY = bytes([5, 20, 70, 111, 111, 200, 0, 188, 5, 11, 122, 122])
OTHER_KEY = "00" * 32


async def test_encrypt_and_decrypt_string(encryption_key: str) -> None:
    encrypted = await encrypt_string(EXAMPLE_TEXT, encryption_key, True)
    decrypted = await decrypt_to_string(encrypted, encryption_key, True)

    assert ENVELOPE_PATTERN.fullmatch(encrypted)
    assert decrypted == EXAMPLE_TEXT


async def test_encrypt_and_decrypt_binary(encryption_key: str) -> None:
    encrypted = await encrypt_binary(EXAMPLE_BINARY, encryption_key)
    decrypted = await decrypt_binary(encrypted, encryption_key)

    assert ENVELOPE_PATTERN.fullmatch(encrypted)
    assert decrypted == EXAMPLE_BINARY


async def test_encrypt_and_decrypt_string_with_small_chunks(encryption_key: str) -> None:
    encrypted = await encrypt_string(EXAMPLE_TEXT, encryption_key, True, 2)
    decrypted = await decrypt_to_string(encrypted, encryption_key, True, 2)

    assert ENVELOPE_PATTERN.fullmatch(encrypted)
    assert decrypted == EXAMPLE_TEXT


async def test_encrypt_and_decrypt_binary_with_small_chunks(encryption_key: str) -> None:
    encrypted = await encrypt_binary(EXAMPLE_BINARY, encryption_key, 2)
    decrypted = await decrypt_binary(encrypted, encryption_key, 2)

    assert ENVELOPE_PATTERN.fullmatch(encrypted)
    assert decrypted == EXAMPLE_BINARY


async def test_encrypt_and_decrypt_latin_string(encryption_key: str) -> None:
    encrypted = await encrypt_string(EXAMPLE_LATIN_TEXT, encryption_key, False)
    decrypted = await decrypt_to_string(encrypted, encryption_key, False)

    assert ENVELOPE_PATTERN.fullmatch(encrypted)
    assert decrypted == EXAMPLE_LATIN_TEXT


async def test_latin_mode_rejects_wide_characters(encryption_key: str) -> None:
    with pytest.raises(UnicodeEncodeError):
        await encrypt_string("łąć", encryption_key, False)


async def test_chunk_size_does_not_change_plaintext(encryption_key: str) -> None:
    payload = bytes(range(256)) * 5
    encrypted = await encrypt_binary(payload, encryption_key, 7)

    for chunk_size in (1, 3, 16, 1000, 65536):
        assert await decrypt_binary(encrypted, encryption_key, chunk_size) == payload


async def test_ciphertext_length_is_padded_to_block(encryption_key: str) -> None:
    for size in (0, 1, 15, 16, 17, 32):
        envelope = Envelope.parse(await encrypt_binary(b"\x01" * size, encryption_key))
        ciphertext_len = len(envelope.ciphertext_hex) // 2

        assert ciphertext_len % 16 == 0
        assert ciphertext_len == (size // 16 + 1) * 16
        assert len(envelope.iv) == 16


async def test_empty_inputs_round_trip(encryption_key: str) -> None:
    assert await decrypt_binary(await encrypt_binary(b"", encryption_key), encryption_key) == b""
    assert await decrypt_to_string(await encrypt_string("", encryption_key), encryption_key) == ""


async def test_every_call_draws_a_fresh_iv(encryption_key: str) -> None:
    envelopes = [Envelope.parse(await encrypt_string("same", encryption_key)) for _ in range(10)]

    assert len({envelope.iv for envelope in envelopes}) == 10
    assert len({envelope.ciphertext_hex for envelope in envelopes}) == 10


async def test_encrypt_accepts_bytearray_and_memoryview(encryption_key: str) -> None:
    from_bytearray = await encrypt(bytearray(EXAMPLE_BINARY), encryption_key)
    from_view = await encrypt(memoryview(EXAMPLE_BINARY), encryption_key)

    assert await decrypt_binary(from_bytearray, encryption_key) == EXAMPLE_BINARY
    assert await decrypt_binary(from_view, encryption_key) == EXAMPLE_BINARY


async def test_decrypt_without_decode_flag_returns_bytes(encryption_key: str) -> None:
    encrypted = await encrypt_string(EXAMPLE_LATIN_TEXT, encryption_key, False)

    assert await decrypt(encrypted, encryption_key) == EXAMPLE_LATIN_TEXT.encode("latin-1")


async def test_wrong_key_fails(encryption_key: str) -> None:
    encrypted = await encrypt_string(EXAMPLE_TEXT, encryption_key, True)

    with pytest.raises(SymmetricDecryptionFailed) as excinfo:
        await decrypt_to_string(encrypted, OTHER_KEY, True)

    assert str(excinfo.value) == "Unable to decrypt data"
    assert excinfo.value.kind is ErrorKind.SYMMETRIC_DECRYPTION_FAILED
    assert isinstance(excinfo.value, DecryptionError)


async def test_misaligned_ciphertext_fails(encryption_key: str) -> None:
    envelope = Envelope.parse(await encrypt_binary(EXAMPLE_BINARY, encryption_key))
    truncated = f"AES-CBC:{envelope.iv.hex()}:{envelope.ciphertext_hex[:-2]}"

    with pytest.raises(SymmetricDecryptionFailed):
        await decrypt_binary(truncated, encryption_key)


async def test_odd_length_ciphertext_is_malformed(encryption_key: str) -> None:
    envelope = Envelope.parse(await encrypt_binary(EXAMPLE_BINARY, encryption_key))

    with pytest.raises(MalformedEnvelope):
        await decrypt_binary(f"AES-CBC:{envelope.iv.hex()}:{envelope.ciphertext_hex}0", encryption_key)


@pytest.mark.parametrize("chunk_size", [0, -5])
async def test_encrypt_rejects_invalid_chunk_size(encryption_key: str, chunk_size: int) -> None:
    with pytest.raises(InvalidChunkSize):
        await encrypt_string("text", encryption_key, True, chunk_size)


@pytest.mark.parametrize("chunk_size", [0, -5])
async def test_decrypt_rejects_invalid_chunk_size(encryption_key: str, chunk_size: int) -> None:
    encrypted = await encrypt_string("text", encryption_key)

    with pytest.raises(InvalidChunkSize):
        await decrypt_to_string(encrypted, encryption_key, True, chunk_size)


async def test_invalid_chunk_size_is_checked_before_the_envelope(encryption_key: str) -> None:
    with pytest.raises(InvalidChunkSize):
        await decrypt_binary("not an envelope", encryption_key, 0)
