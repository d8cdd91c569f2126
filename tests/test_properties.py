"""Property-based tests for the codec round trips and envelope parsing."""

from __future__ import annotations

import asyncio

import pytest
from hypothesis import given, settings, strategies as st

from crypto_codec.codec import (
    Envelope,
    decrypt_binary,
    decrypt_to_string,
    digest,
    encrypt_binary,
    encrypt_string,
)
from crypto_codec.crypto.digest import digest_bytes
from crypto_codec.errors import MalformedEnvelope, UnsupportedCipher, ValidationError

KEY = "12d424724067e66bbfc80f0df651695792a42307e9507b2725600016c8dbc337"

chunk_sizes = st.integers(min_value=1, max_value=64)


@settings(max_examples=50, deadline=None)
@given(payload=st.binary(max_size=300), encrypt_chunk=chunk_sizes, decrypt_chunk=chunk_sizes)
def test_binary_round_trip(payload: bytes, encrypt_chunk: int, decrypt_chunk: int) -> None:
    async def _run() -> bytes:
        envelope = await encrypt_binary(payload, KEY, encrypt_chunk)
        return await decrypt_binary(envelope, KEY, decrypt_chunk)

    assert asyncio.run(_run()) == payload


@settings(max_examples=50, deadline=None)
@given(text=st.text(max_size=200), chunk_size=chunk_sizes)
def test_utf8_string_round_trip(text: str, chunk_size: int) -> None:
    async def _run() -> str:
        envelope = await encrypt_string(text, KEY, True, chunk_size)
        return await decrypt_to_string(envelope, KEY, True, chunk_size)

    assert asyncio.run(_run()) == text


@settings(max_examples=50, deadline=None)
@given(text=st.text(alphabet=st.characters(max_codepoint=0xFF), max_size=200), chunk_size=chunk_sizes)
def test_latin_string_round_trip(text: str, chunk_size: int) -> None:
    async def _run() -> str:
        envelope = await encrypt_string(text, KEY, False, chunk_size)
        return await decrypt_to_string(envelope, KEY, False, chunk_size)

    assert asyncio.run(_run()) == text


@settings(max_examples=50, deadline=None)
@given(text=st.text(max_size=500), chunk_size=chunk_sizes)
def test_digest_matches_one_shot(text: str, chunk_size: int) -> None:
    assert asyncio.run(digest(text, chunk_size)) == digest_bytes(text.encode("utf-8"))


@given(text=st.text(max_size=120))
def test_envelope_parse_never_fails_unexpectedly(text: str) -> None:
    try:
        envelope = Envelope.parse(text)
    except ValidationError as exc:
        assert isinstance(exc, (MalformedEnvelope, UnsupportedCipher))
    else:
        assert Envelope.parse(envelope.serialize()) == envelope


@given(iv=st.binary(min_size=16, max_size=16), ciphertext=st.binary(min_size=1, max_size=64))
def test_envelope_serialize_parse(iv: bytes, ciphertext: bytes) -> None:
    text = f"AES-CBC:{iv.hex()}:{ciphertext.hex()}"
    envelope = Envelope.parse(text)

    assert envelope.iv == iv
    assert envelope.serialize() == text


@given(chunk_size=st.integers(max_value=0))
def test_non_positive_chunk_sizes_rejected(chunk_size: int) -> None:
    with pytest.raises(ValidationError):
        asyncio.run(digest("text", chunk_size))
