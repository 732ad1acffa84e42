"""
Загрузчик AEAD алгоритмов.

NOTE: AES-CTR-HMAC менеджеры строят MAC примитивы через реестр,
поэтому сначала вызывается mac_config.register_standard_algorithms().
IND-CPA шифры (AES-*-CTR) регистрируются здесь же: они нужны только
как составная часть Encrypt-then-Authenticate.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from src.agility.algorithms.aead import (
    AesCtr128HmacSha1KeyManager,
    AesCtr128HmacSha256KeyManager,
    AesCtr128KeyManager,
    AesCtr256HmacSha256KeyManager,
    AesCtr256KeyManager,
    AesGcm128KeyManager,
    AesGcm256KeyManager,
    ChaCha20Poly1305KeyManager,
)
from src.agility.config import mac_config
from src.agility.config.base import (
    register_key_managers,
    register_typed_key_manager,
    resolve_registry,
)
from src.agility.core.protocols import Aead, IndCpaCipher, KeyManager
from src.agility.core.registry import Registry

STANDARD_KEY_TYPES: Tuple[str, ...] = (
    "AES-128-CTR",
    "AES-256-CTR",
    "AES-128-GCM",
    "AES-256-GCM",
    "CHACHA20-POLY1305",
    "AES-128-CTR-HMAC-SHA256",
    "AES-256-CTR-HMAC-SHA256",
)
DEPRECATED_KEY_TYPES: Tuple[str, ...] = ("AES-128-CTR-HMAC-SHA1",)


def standard_key_managers(registry: Registry) -> List[KeyManager]:
    return [
        AesCtr128KeyManager(),
        AesCtr256KeyManager(),
        AesGcm128KeyManager(),
        AesGcm256KeyManager(),
        ChaCha20Poly1305KeyManager(),
        AesCtr128HmacSha256KeyManager(registry),
        AesCtr256HmacSha256KeyManager(registry),
    ]


def deprecated_key_managers(registry: Registry) -> List[KeyManager]:
    return [AesCtr128HmacSha1KeyManager(registry)]


def register_standard_algorithms(registry: Optional[Registry] = None) -> None:
    """Зарегистрировать AEAD алгоритмы текущего релиза (и MAC)."""
    registry = resolve_registry(registry)
    mac_config.register_standard_algorithms(registry)
    register_key_managers(
        "AeadConfig",
        registry,
        standard_key_managers(registry),
        deprecated_key_managers(registry),
    )


def register_key_manager(
    key_manager: KeyManager,
    registry: Optional[Registry] = None,
    *,
    new_key_allowed: bool = True,
) -> None:
    """Зарегистрировать пользовательский менеджер Aead или IndCpaCipher."""
    register_typed_key_manager(
        (Aead, IndCpaCipher), key_manager, registry, new_key_allowed=new_key_allowed
    )


__all__: list[str] = [
    "STANDARD_KEY_TYPES",
    "DEPRECATED_KEY_TYPES",
    "register_standard_algorithms",
    "register_key_manager",
]
