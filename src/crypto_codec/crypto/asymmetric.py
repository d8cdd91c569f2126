"""RSA key pair generation and PKCS#1 v1.5 encryption."""

from __future__ import annotations

import base64
from dataclasses import dataclass

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from crypto_codec.errors import AsymmetricOperationFailed, KeyPairGenerationFailed

RSA_PUBLIC_EXPONENT = 65537


@dataclass(frozen=True)
class KeyPair:
    public_key: str
    private_key: str

    def __repr__(self) -> str:
        return "KeyPair(public_key=..., private_key=[REDACTED])"


def generate_key_pair_sync(bit_length: int) -> KeyPair:
    """Generate a fresh RSA key pair encoded as PEM.

    The public key is SubjectPublicKeyInfo (``BEGIN PUBLIC KEY``) and the
    private key uses the traditional OpenSSL layout (``BEGIN RSA PRIVATE KEY``).
    """

    try:
        private_key = rsa.generate_private_key(public_exponent=RSA_PUBLIC_EXPONENT, key_size=bit_length)
        private_pem = private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
        public_pem = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
    except (ValueError, TypeError) as exc:
        raise KeyPairGenerationFailed(f"Key pair not generated: {exc}") from exc

    return KeyPair(
        public_key=public_pem.decode("ascii").strip(),
        private_key=private_pem.decode("ascii").strip(),
    )


def _load_public_key(public_key_pem: str) -> rsa.RSAPublicKey:
    key = serialization.load_pem_public_key(public_key_pem.strip().encode("ascii"))
    if not isinstance(key, rsa.RSAPublicKey):
        raise TypeError("Public key is not an RSA key")
    return key


def _load_private_key(private_key_pem: str) -> rsa.RSAPrivateKey:
    key = serialization.load_pem_private_key(private_key_pem.strip().encode("ascii"), password=None)
    if not isinstance(key, rsa.RSAPrivateKey):
        raise TypeError("Private key is not an RSA key")
    return key


def rsa_encrypt(plaintext: str, public_key_pem: str) -> str:
    """Encrypt ``plaintext`` (UTF-8, then base64) and return ciphertext hex."""

    try:
        encoded = base64.b64encode(plaintext.encode("utf-8"))
        ciphertext = _load_public_key(public_key_pem).encrypt(encoded, padding.PKCS1v15())
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise AsymmetricOperationFailed(f"Asymmetric encryption failed: {exc}") from exc
    return ciphertext.hex()


def rsa_decrypt(ciphertext_hex: str, private_key_pem: str) -> str:
    """Inverse of :func:`rsa_encrypt`."""

    try:
        ciphertext = bytes.fromhex(ciphertext_hex)
        encoded = _load_private_key(private_key_pem).decrypt(ciphertext, padding.PKCS1v15())
        return base64.b64decode(encoded, validate=True).decode("utf-8")
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise AsymmetricOperationFailed(f"Asymmetric decryption failed: {exc}") from exc


__all__ = [
    "KeyPair",
    "RSA_PUBLIC_EXPONENT",
    "generate_key_pair_sync",
    "rsa_decrypt",
    "rsa_encrypt",
]
