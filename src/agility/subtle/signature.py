"""
Примитивы цифровой подписи: Ed25519 и ECDSA P-256/SHA-256.

Форматы ключевого материала:
    Ed25519:  private = 32-byte seed, public = 32 bytes (RFC 8032)
    ECDSA:    private = 32-byte big-endian scalar,
              public = uncompressed SEC1 point (65 bytes)

ECDSA подписи в DER формате. verify() возвращает bool и НЕ бросает
исключение на невалидной подписи.
"""

from __future__ import annotations

import logging
from typing import Final

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, ed25519
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from src.agility.core.exceptions import InvalidKeyMaterialError, SigningFailedError
from src.agility.core.key_manager import require_bytes

logger = logging.getLogger(__name__)

ED25519_KEY_SIZE: Final[int] = 32
P256_SCALAR_SIZE: Final[int] = 32
P256_POINT_SIZE: Final[int] = 65


# ==============================================================================
# Ed25519
# ==============================================================================


def _load_ed25519_private(private_key: bytes) -> ed25519.Ed25519PrivateKey:
    try:
        return ed25519.Ed25519PrivateKey.from_private_bytes(private_key)
    except (TypeError, ValueError) as e:
        raise InvalidKeyMaterialError(
            "Invalid Ed25519 private key", algorithm="ED25519"
        ) from e


def ed25519_public_from_private(private_key: bytes) -> bytes:
    """Вывести 32-байтный публичный ключ Ed25519."""
    key = _load_ed25519_private(private_key)
    return key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)


class Ed25519Sign:
    """
    Ed25519 подпись.

    Security Note:
        Ed25519 детерминированная - одно сообщение всегда даёт одну подпись.
    """

    def __init__(self, private_key: bytes) -> None:
        self._key = _load_ed25519_private(private_key)

    def sign(self, data: bytes) -> bytes:
        require_bytes("data", data)
        try:
            return self._key.sign(data)
        except Exception as e:
            raise SigningFailedError("Ed25519 signing failed", algorithm="ED25519") from e


class Ed25519Verify:
    """Проверка Ed25519 подписи."""

    def __init__(self, public_key: bytes) -> None:
        try:
            self._key = ed25519.Ed25519PublicKey.from_public_bytes(public_key)
        except (TypeError, ValueError) as e:
            raise InvalidKeyMaterialError(
                "Invalid Ed25519 public key", algorithm="ED25519"
            ) from e

    def verify(self, signature: bytes, data: bytes) -> bool:
        require_bytes("signature", signature)
        require_bytes("data", data)
        try:
            self._key.verify(signature, data)
            return True
        except InvalidSignature:
            return False


# ==============================================================================
# ECDSA P-256
# ==============================================================================


def _load_p256_private(private_key: bytes) -> ec.EllipticCurvePrivateKey:
    if not isinstance(private_key, bytes) or len(private_key) != P256_SCALAR_SIZE:
        raise InvalidKeyMaterialError(
            f"ECDSA-P256 private key must be {P256_SCALAR_SIZE} bytes",
            algorithm="ECDSA-P256-SHA256",
            expected_size=P256_SCALAR_SIZE,
            actual_size=len(private_key) if isinstance(private_key, bytes) else None,
        )
    try:
        return ec.derive_private_key(
            int.from_bytes(private_key, "big"), ec.SECP256R1()
        )
    except ValueError as e:
        # Скаляр вне диапазона [1, n-1]
        raise InvalidKeyMaterialError(
            "ECDSA-P256 private scalar out of range", algorithm="ECDSA-P256-SHA256"
        ) from e


def p256_private_bytes(key: ec.EllipticCurvePrivateKey) -> bytes:
    """Сериализовать приватный скаляр P-256 в 32 байта big-endian."""
    return key.private_numbers().private_value.to_bytes(P256_SCALAR_SIZE, "big")


def p256_public_from_private(private_key: bytes) -> bytes:
    """Вывести несжатую точку SEC1 (65 байт) из приватного скаляра."""
    key = _load_p256_private(private_key)
    return key.public_key().public_bytes(Encoding.X962, PublicFormat.UncompressedPoint)


class EcdsaP256Sign:
    """ECDSA на NIST P-256 с SHA-256, подпись в DER."""

    def __init__(self, private_key: bytes) -> None:
        self._key = _load_p256_private(private_key)

    def sign(self, data: bytes) -> bytes:
        require_bytes("data", data)
        try:
            return self._key.sign(data, ec.ECDSA(hashes.SHA256()))
        except Exception as e:
            raise SigningFailedError(
                "ECDSA-P256 signing failed", algorithm="ECDSA-P256-SHA256"
            ) from e


class EcdsaP256Verify:
    """Проверка ECDSA P-256/SHA-256 подписи (DER)."""

    def __init__(self, public_key: bytes) -> None:
        try:
            self._key = ec.EllipticCurvePublicKey.from_encoded_point(
                ec.SECP256R1(), public_key
            )
        except (TypeError, ValueError) as e:
            raise InvalidKeyMaterialError(
                "Invalid ECDSA-P256 public point", algorithm="ECDSA-P256-SHA256"
            ) from e

    def verify(self, signature: bytes, data: bytes) -> bool:
        require_bytes("signature", signature)
        require_bytes("data", data)
        try:
            self._key.verify(signature, data, ec.ECDSA(hashes.SHA256()))
            return True
        except InvalidSignature:
            return False


__all__: list[str] = [
    "Ed25519Sign",
    "Ed25519Verify",
    "EcdsaP256Sign",
    "EcdsaP256Verify",
    "ed25519_public_from_private",
    "p256_public_from_private",
    "p256_private_bytes",
]
