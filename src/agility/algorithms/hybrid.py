"""
Менеджеры ключей гибридного шифрования (ECIES X25519 + HKDF-SHA256).

Каждая схема имеет пару идентификаторов:
    <SCHEME>-PRIVATE  -> HybridDecrypt (генерирует ключи)
    <SCHEME>-PUBLIC   -> HybridEncrypt (ключи выводятся из приватного)

DEM (AEAD для данных) разрешается через реестр по DEM_KEY_TYPE в момент
построения примитива, поэтому AEAD алгоритмы должны быть
зарегистрированы раньше (см. hybrid_config).

Схемы:
    ECIES-X25519-HKDF-SHA256-AES128-GCM
    ECIES-X25519-HKDF-SHA256-AES128-CTR-HMAC-SHA256
"""

from __future__ import annotations

import logging
from typing import ClassVar, Optional

from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
)

from src.agility.core.exceptions import KeyGenerationError
from src.agility.core.key_manager import RawKeyManager
from src.agility.core.protocols import Aead, HybridDecrypt, HybridEncrypt
from src.agility.core.registry import Registry
from src.agility.subtle.ecies import (
    X25519_KEY_SIZE,
    EciesX25519HybridDecrypt,
    EciesX25519HybridEncrypt,
    x25519_public_from_private,
)

logger = logging.getLogger(__name__)


class _EciesMixin:
    """Разрешение DEM через реестр."""

    DEM_KEY_TYPE: ClassVar[str]
    DEM_KEY_SIZE: ClassVar[int]

    def __init__(self, registry: Optional[Registry] = None) -> None:
        self._registry = registry

    def _dem_factory(self, dem_key: bytes) -> Aead:
        registry = self._registry if self._registry is not None else Registry.get_instance()
        return registry.primitive_for(self.DEM_KEY_TYPE, dem_key, Aead)


class _EciesPrivateKeyManager(_EciesMixin, RawKeyManager):
    primitive = HybridDecrypt
    KEY_SIZE = X25519_KEY_SIZE
    public_key_type: ClassVar[str]

    def _build(self, key_material: bytes) -> EciesX25519HybridDecrypt:
        return EciesX25519HybridDecrypt(
            key_material, self._dem_factory, self.DEM_KEY_SIZE
        )

    def generate(self) -> bytes:
        return X25519PrivateKey.generate().private_bytes(
            encoding=Encoding.Raw,
            format=PrivateFormat.Raw,
            encryption_algorithm=NoEncryption(),
        )

    def public_key(self, private_key: bytes) -> bytes:
        self.validate(private_key)
        return x25519_public_from_private(private_key)


class _EciesPublicKeyManager(_EciesMixin, RawKeyManager):
    primitive = HybridEncrypt
    supports_generation = False
    KEY_SIZE = X25519_KEY_SIZE

    def _build(self, key_material: bytes) -> EciesX25519HybridEncrypt:
        return EciesX25519HybridEncrypt(
            key_material, self._dem_factory, self.DEM_KEY_SIZE
        )

    def generate(self) -> bytes:
        raise KeyGenerationError(
            f"{self.key_type} keys are derived from {self.key_type[:-7]}-PRIVATE",
            algorithm=self.key_type,
        )


# ==============================================================================
# ECIES + AES-128-GCM
# ==============================================================================


class EciesAesGcmPrivateKeyManager(_EciesPrivateKeyManager):
    key_type = "ECIES-X25519-HKDF-SHA256-AES128-GCM-PRIVATE"
    public_key_type = "ECIES-X25519-HKDF-SHA256-AES128-GCM-PUBLIC"
    DEM_KEY_TYPE = "AES-128-GCM"
    DEM_KEY_SIZE = 16


class EciesAesGcmPublicKeyManager(_EciesPublicKeyManager):
    key_type = "ECIES-X25519-HKDF-SHA256-AES128-GCM-PUBLIC"
    DEM_KEY_TYPE = "AES-128-GCM"
    DEM_KEY_SIZE = 16


# ==============================================================================
# ECIES + AES-128-CTR-HMAC-SHA256 (Encrypt-then-Authenticate)
# ==============================================================================


class EciesAesCtrHmacPrivateKeyManager(_EciesPrivateKeyManager):
    key_type = "ECIES-X25519-HKDF-SHA256-AES128-CTR-HMAC-SHA256-PRIVATE"
    public_key_type = "ECIES-X25519-HKDF-SHA256-AES128-CTR-HMAC-SHA256-PUBLIC"
    DEM_KEY_TYPE = "AES-128-CTR-HMAC-SHA256"
    DEM_KEY_SIZE = 48


class EciesAesCtrHmacPublicKeyManager(_EciesPublicKeyManager):
    key_type = "ECIES-X25519-HKDF-SHA256-AES128-CTR-HMAC-SHA256-PUBLIC"
    DEM_KEY_TYPE = "AES-128-CTR-HMAC-SHA256"
    DEM_KEY_SIZE = 48


__all__: list[str] = [
    "EciesAesGcmPrivateKeyManager",
    "EciesAesGcmPublicKeyManager",
    "EciesAesCtrHmacPrivateKeyManager",
    "EciesAesCtrHmacPublicKeyManager",
]
