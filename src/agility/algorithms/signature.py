"""
Менеджеры ключей цифровой подписи.

    ED25519-PRIVATE / ED25519-PUBLIC
    ECDSA-P256-SHA256-PRIVATE / ECDSA-P256-SHA256-PUBLIC

Публичные менеджеры не генерируют ключи: публичный ключ выводится
из приватного через Registry.get_public_key().
"""

from __future__ import annotations

import logging

from cryptography.hazmat.primitives.asymmetric import ec, ed25519
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
)

from src.agility.core.exceptions import InvalidKeyMaterialError, KeyGenerationError
from src.agility.core.key_manager import RawKeyManager
from src.agility.core.protocols import PublicKeySign, PublicKeyVerify
from src.agility.subtle.signature import (
    ED25519_KEY_SIZE,
    P256_POINT_SIZE,
    P256_SCALAR_SIZE,
    EcdsaP256Sign,
    EcdsaP256Verify,
    Ed25519Sign,
    Ed25519Verify,
    ed25519_public_from_private,
    p256_private_bytes,
    p256_public_from_private,
)

logger = logging.getLogger(__name__)


class _PublicKeyManager(RawKeyManager):
    supports_generation = False

    def generate(self) -> bytes:
        raise KeyGenerationError(
            f"{self.key_type} keys are derived from the private key",
            algorithm=self.key_type,
        )


# ==============================================================================
# Ed25519
# ==============================================================================


class Ed25519PrivateKeyManager(RawKeyManager):
    key_type = "ED25519-PRIVATE"
    public_key_type = "ED25519-PUBLIC"
    primitive = PublicKeySign
    KEY_SIZE = ED25519_KEY_SIZE

    def _build(self, key_material: bytes) -> Ed25519Sign:
        return Ed25519Sign(key_material)

    def generate(self) -> bytes:
        return ed25519.Ed25519PrivateKey.generate().private_bytes(
            encoding=Encoding.Raw,
            format=PrivateFormat.Raw,
            encryption_algorithm=NoEncryption(),
        )

    def public_key(self, private_key: bytes) -> bytes:
        self.validate(private_key)
        return ed25519_public_from_private(private_key)


class Ed25519PublicKeyManager(_PublicKeyManager):
    key_type = "ED25519-PUBLIC"
    primitive = PublicKeyVerify
    KEY_SIZE = ED25519_KEY_SIZE

    def _build(self, key_material: bytes) -> Ed25519Verify:
        return Ed25519Verify(key_material)


# ==============================================================================
# ECDSA P-256
# ==============================================================================


class EcdsaP256PrivateKeyManager(RawKeyManager):
    key_type = "ECDSA-P256-SHA256-PRIVATE"
    public_key_type = "ECDSA-P256-SHA256-PUBLIC"
    primitive = PublicKeySign
    KEY_SIZE = P256_SCALAR_SIZE

    def _build(self, key_material: bytes) -> EcdsaP256Sign:
        return EcdsaP256Sign(key_material)

    def generate(self) -> bytes:
        return p256_private_bytes(ec.generate_private_key(ec.SECP256R1()))

    def public_key(self, private_key: bytes) -> bytes:
        self.validate(private_key)
        return p256_public_from_private(private_key)


class EcdsaP256PublicKeyManager(_PublicKeyManager):
    key_type = "ECDSA-P256-SHA256-PUBLIC"
    primitive = PublicKeyVerify
    KEY_SIZE = P256_POINT_SIZE

    def validate(self, key_material: bytes) -> None:
        super().validate(key_material)
        # SEC1 uncompressed point prefix
        if key_material[0] != 0x04:
            raise InvalidKeyMaterialError(
                "ECDSA-P256 public key must be an uncompressed SEC1 point",
                algorithm=self.key_type,
            )

    def _build(self, key_material: bytes) -> EcdsaP256Verify:
        return EcdsaP256Verify(key_material)


__all__: list[str] = [
    "Ed25519PrivateKeyManager",
    "Ed25519PublicKeyManager",
    "EcdsaP256PrivateKeyManager",
    "EcdsaP256PublicKeyManager",
]
