"""Incremental AES-CBC contexts with PKCS#7 padding."""

from __future__ import annotations

from enum import Enum

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from crypto_codec.errors import MalformedEnvelope, SymmetricDecryptionFailed, UnsupportedCipher

AES_BLOCK_BITS = 128
IV_LEN = 16
AES_256_KEY_LEN = 32


class CipherAlgorithm(Enum):
    """Symmetric algorithms that may appear in an envelope."""

    AES_CBC = "AES-CBC"

    @classmethod
    def from_name(cls, name: str) -> CipherAlgorithm:
        try:
            return cls(name)
        except ValueError:
            raise UnsupportedCipher(name) from None

    @property
    def iv_length(self) -> int:
        return IV_LEN

    @property
    def key_length(self) -> int:
        return AES_256_KEY_LEN

    def encryptor(self, key: bytes, iv: bytes) -> CbcEncryptContext:
        return CbcEncryptContext(key, iv)

    def decryptor(self, key: bytes, iv: bytes) -> CbcDecryptContext:
        return CbcDecryptContext(key, iv)


class CbcEncryptContext:
    """Pads and encrypts plaintext bytes fed in arbitrary slices."""

    def __init__(self, key: bytes, iv: bytes) -> None:
        self._encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        self._padder = padding.PKCS7(AES_BLOCK_BITS).padder()
        self._output = bytearray()

    def update(self, piece: bytes) -> None:
        self._output += self._encryptor.update(self._padder.update(piece))

    def finalize(self) -> bytes:
        self._output += self._encryptor.update(self._padder.finalize())
        self._output += self._encryptor.finalize()
        return bytes(self._output)


class CbcDecryptContext:
    """Decrypts ciphertext fed as hex slices and strips the padding.

    Slices must hold an even number of hex digits; the caller steps through
    the ciphertext hex two characters per byte.
    """

    def __init__(self, key: bytes, iv: bytes) -> None:
        self._decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        self._unpadder = padding.PKCS7(AES_BLOCK_BITS).unpadder()
        self._output = bytearray()

    def update(self, piece: str) -> None:
        try:
            chunk = bytes.fromhex(piece)
        except ValueError as exc:
            raise MalformedEnvelope() from exc
        self._output += self._unpadder.update(self._decryptor.update(chunk))

    def finalize(self) -> bytes:
        try:
            self._output += self._unpadder.update(self._decryptor.finalize())
            self._output += self._unpadder.finalize()
        except ValueError as exc:
            # Misaligned ciphertext or bad padding: wrong key, IV or data.
            raise SymmetricDecryptionFailed() from exc
        return bytes(self._output)


__all__ = [
    "AES_256_KEY_LEN",
    "AES_BLOCK_BITS",
    "CbcDecryptContext",
    "CbcEncryptContext",
    "CipherAlgorithm",
    "IV_LEN",
]
