"""Custom exceptions for crypto-codec.

Every failure raised by the codec belongs to exactly one :class:`ErrorKind`,
so callers can branch on ``exc.kind`` instead of matching messages.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    INVALID_CHUNK_SIZE = "invalid-chunk-size"
    MALFORMED_ENVELOPE = "malformed-envelope"
    UNSUPPORTED_CIPHER = "unsupported-cipher"
    SYMMETRIC_DECRYPTION_FAILED = "symmetric-decryption-failed"
    ASYMMETRIC_OPERATION_FAILED = "asymmetric-operation-failed"
    DIGEST_MISMATCH = "digest-mismatch"
    KEY_DERIVATION_FAILED = "key-derivation-failed"
    KEY_PAIR_GENERATION_FAILED = "key-pair-generation-failed"
    RANDOM_SOURCE_EXHAUSTED = "random-source-exhausted"


class CodecError(Exception):
    """Base exception for crypto-codec."""

    kind: ErrorKind


class ValidationError(CodecError):
    """Caller supplied an argument or input the codec cannot accept."""


class DecryptionError(CodecError):
    """Ciphertext, key and parameters are inconsistent."""


class PrimitiveFailure(CodecError):
    """Underlying primitive could not produce output. Not recoverable."""


class InvalidChunkSize(ValidationError):
    kind = ErrorKind.INVALID_CHUNK_SIZE

    def __init__(self, chunk_size: object) -> None:
        super().__init__(f"Chunk size must be a positive integer, got {chunk_size!r}")
        self.chunk_size = chunk_size


class MalformedEnvelope(ValidationError):
    kind = ErrorKind.MALFORMED_ENVELOPE

    def __init__(self, message: str = "Malformed encrypted input") -> None:
        super().__init__(message)


class UnsupportedCipher(ValidationError):
    kind = ErrorKind.UNSUPPORTED_CIPHER

    def __init__(self, algorithm: str) -> None:
        super().__init__(f"{algorithm} is not valid cipher")
        self.algorithm = algorithm


class SymmetricDecryptionFailed(DecryptionError):
    kind = ErrorKind.SYMMETRIC_DECRYPTION_FAILED

    def __init__(self, message: str = "Unable to decrypt data") -> None:
        super().__init__(message)


class AsymmetricOperationFailed(DecryptionError):
    """RSA operation failed; the message is meant for diagnostics only."""

    kind = ErrorKind.ASYMMETRIC_OPERATION_FAILED


class DigestMismatch(DecryptionError):
    kind = ErrorKind.DIGEST_MISMATCH

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"Expected decrypted file digest to be {expected} but got {actual}")
        self.expected = expected
        self.actual = actual


class KeyDerivationFailed(PrimitiveFailure):
    kind = ErrorKind.KEY_DERIVATION_FAILED


class KeyPairGenerationFailed(PrimitiveFailure):
    kind = ErrorKind.KEY_PAIR_GENERATION_FAILED


class RandomSourceExhausted(PrimitiveFailure):
    kind = ErrorKind.RANDOM_SOURCE_EXHAUSTED
