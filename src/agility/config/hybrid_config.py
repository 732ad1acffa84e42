"""
Загрузчики гибридного шифрования (HybridEncrypt и HybridDecrypt).

NOTE: ECIES менеджеры строят DEM (AEAD) через реестр, поэтому оба
загрузчика сначала вызывают aead_config.register_standard_algorithms()
(который, в свою очередь, регистрирует MAC).
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from src.agility.algorithms.hybrid import (
    EciesAesCtrHmacPrivateKeyManager,
    EciesAesCtrHmacPublicKeyManager,
    EciesAesGcmPrivateKeyManager,
    EciesAesGcmPublicKeyManager,
)
from src.agility.config import aead_config
from src.agility.config.base import (
    register_key_managers,
    register_typed_key_manager,
    resolve_registry,
)
from src.agility.core.protocols import HybridDecrypt, HybridEncrypt, KeyManager
from src.agility.core.registry import Registry

DECRYPT_KEY_TYPES: Tuple[str, ...] = (
    "ECIES-X25519-HKDF-SHA256-AES128-GCM-PRIVATE",
    "ECIES-X25519-HKDF-SHA256-AES128-CTR-HMAC-SHA256-PRIVATE",
)
ENCRYPT_KEY_TYPES: Tuple[str, ...] = (
    "ECIES-X25519-HKDF-SHA256-AES128-GCM-PUBLIC",
    "ECIES-X25519-HKDF-SHA256-AES128-CTR-HMAC-SHA256-PUBLIC",
)


def decrypt_key_managers(registry: Registry) -> List[KeyManager]:
    return [
        EciesAesGcmPrivateKeyManager(registry),
        EciesAesCtrHmacPrivateKeyManager(registry),
    ]


def encrypt_key_managers(registry: Registry) -> List[KeyManager]:
    return [
        EciesAesGcmPublicKeyManager(registry),
        EciesAesCtrHmacPublicKeyManager(registry),
    ]


def register_decrypt_algorithms(registry: Optional[Registry] = None) -> None:
    """Зарегистрировать HybridDecrypt алгоритмы (и AEAD, MAC)."""
    registry = resolve_registry(registry)
    aead_config.register_standard_algorithms(registry)
    register_key_managers("HybridDecryptConfig", registry, decrypt_key_managers(registry))


def register_encrypt_algorithms(registry: Optional[Registry] = None) -> None:
    """Зарегистрировать HybridEncrypt алгоритмы (и AEAD, MAC)."""
    registry = resolve_registry(registry)
    aead_config.register_standard_algorithms(registry)
    register_key_managers("HybridEncryptConfig", registry, encrypt_key_managers(registry))


def register_standard_algorithms(registry: Optional[Registry] = None) -> None:
    """Зарегистрировать обе стороны гибридного шифрования."""
    registry = resolve_registry(registry)
    register_decrypt_algorithms(registry)
    register_encrypt_algorithms(registry)


def register_key_manager(
    key_manager: KeyManager,
    registry: Optional[Registry] = None,
    *,
    new_key_allowed: bool = True,
) -> None:
    """Зарегистрировать пользовательский HybridEncrypt/HybridDecrypt менеджер."""
    register_typed_key_manager(
        (HybridEncrypt, HybridDecrypt),
        key_manager,
        registry,
        new_key_allowed=new_key_allowed,
    )


__all__: list[str] = [
    "DECRYPT_KEY_TYPES",
    "ENCRYPT_KEY_TYPES",
    "register_decrypt_algorithms",
    "register_encrypt_algorithms",
    "register_standard_algorithms",
    "register_key_manager",
]
