"""Encrypted file records.

A file is stored as its symmetric envelope split into fields, together with
the SHA-256 digest of the plaintext. The digest is taken over the hex text
of the content and is checked again after decryption.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from crypto_codec.codec.api import BytesLike, decrypt_binary, digest, encrypt_binary
from crypto_codec.codec.envelope import Envelope, is_hex_bytes
from crypto_codec.crypto.streaming import DEFAULT_CHUNK_SIZE
from crypto_codec.crypto.symmetric import CipherAlgorithm
from crypto_codec.errors import DigestMismatch, MalformedEnvelope


@dataclass(frozen=True)
class EncryptedFile:
    algorithm: CipherAlgorithm
    iv: str
    encryption_key_version: str
    ciphertext: str
    digest: str
    name: str
    mime_type: Optional[str] = None

    @property
    def envelope(self) -> Envelope:
        return Envelope.parse(f"{self.algorithm.value}:{self.iv}:{self.ciphertext}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": {
                "algorithm": self.algorithm.value,
                "iv": self.iv,
                "encryptionKeyVersion": self.encryption_key_version,
                "bytes": self.ciphertext,
            },
            "digest": self.digest,
            "name": self.name,
            "mimeType": self.mime_type,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EncryptedFile:
        try:
            content = data["content"]
            algorithm_name = content["algorithm"]
            iv = content["iv"]
            key_version = content["encryptionKeyVersion"]
            ciphertext = content["bytes"]
            file_digest = data["digest"]
            name = data["name"]
        except (KeyError, TypeError) as exc:
            raise MalformedEnvelope(f"Encrypted file record is missing {exc}") from exc

        algorithm = CipherAlgorithm.from_name(algorithm_name)
        if not isinstance(iv, str) or not is_hex_bytes(iv):
            raise MalformedEnvelope("Not valid IV")
        if not isinstance(ciphertext, str) or not is_hex_bytes(ciphertext):
            raise MalformedEnvelope("Not valid file bytes")
        if not isinstance(key_version, str):
            raise MalformedEnvelope("Not valid encryption key version")
        if not isinstance(file_digest, str) or not isinstance(name, str):
            raise MalformedEnvelope("Not valid file digest or name")
        mime_type = data.get("mimeType")
        if mime_type is not None and not isinstance(mime_type, str):
            raise MalformedEnvelope("Not valid MIME type")

        return cls(
            algorithm=algorithm,
            iv=iv,
            encryption_key_version=key_version,
            ciphertext=ciphertext,
            digest=file_digest,
            name=name,
            mime_type=mime_type,
        )


async def encrypt_file(
    content: BytesLike,
    name: str,
    key: str,
    key_version: str,
    mime_type: Optional[str] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> EncryptedFile:
    """Encrypt ``content`` and record the digest of its plaintext."""

    raw = bytes(content)
    content_digest = await digest(raw.hex(), chunk_size)
    envelope = Envelope.parse(await encrypt_binary(raw, key, chunk_size))
    return EncryptedFile(
        algorithm=envelope.algorithm,
        iv=envelope.iv.hex(),
        encryption_key_version=key_version,
        ciphertext=envelope.ciphertext_hex,
        digest=content_digest,
        name=name,
        mime_type=mime_type,
    )


async def decrypt_file(record: EncryptedFile, key: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """Decrypt ``record`` and verify the plaintext digest."""

    content = await decrypt_binary(record.envelope.serialize(), key, chunk_size)
    content_digest = await digest(content.hex(), chunk_size)
    if content_digest != record.digest:
        raise DigestMismatch(record.digest, content_digest)
    return content


__all__ = ["EncryptedFile", "decrypt_file", "encrypt_file"]
