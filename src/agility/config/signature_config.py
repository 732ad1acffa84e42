"""
Загрузчики цифровой подписи (PublicKeySign и PublicKeyVerify).

Подписи не зависят от других загрузчиков.
"""

from __future__ import annotations

from typing import Optional, Tuple

from src.agility.algorithms.signature import (
    EcdsaP256PrivateKeyManager,
    EcdsaP256PublicKeyManager,
    Ed25519PrivateKeyManager,
    Ed25519PublicKeyManager,
)
from src.agility.config.base import (
    register_key_managers,
    register_typed_key_manager,
    resolve_registry,
)
from src.agility.core.protocols import KeyManager, PublicKeySign, PublicKeyVerify
from src.agility.core.registry import Registry

SIGN_KEY_TYPES: Tuple[str, ...] = ("ECDSA-P256-SHA256-PRIVATE", "ED25519-PRIVATE")
VERIFY_KEY_TYPES: Tuple[str, ...] = ("ECDSA-P256-SHA256-PUBLIC", "ED25519-PUBLIC")


def register_sign_algorithms(registry: Optional[Registry] = None) -> None:
    """Зарегистрировать PublicKeySign алгоритмы текущего релиза."""
    register_key_managers(
        "PublicKeySignConfig",
        resolve_registry(registry),
        [EcdsaP256PrivateKeyManager(), Ed25519PrivateKeyManager()],
    )


def register_verify_algorithms(registry: Optional[Registry] = None) -> None:
    """Зарегистрировать PublicKeyVerify алгоритмы текущего релиза."""
    register_key_managers(
        "PublicKeyVerifyConfig",
        resolve_registry(registry),
        [EcdsaP256PublicKeyManager(), Ed25519PublicKeyManager()],
    )


def register_standard_algorithms(registry: Optional[Registry] = None) -> None:
    """Зарегистрировать обе стороны цифровой подписи."""
    registry = resolve_registry(registry)
    register_sign_algorithms(registry)
    register_verify_algorithms(registry)


def register_key_manager(
    key_manager: KeyManager,
    registry: Optional[Registry] = None,
    *,
    new_key_allowed: bool = True,
) -> None:
    """Зарегистрировать пользовательский PublicKeySign/PublicKeyVerify менеджер."""
    register_typed_key_manager(
        (PublicKeySign, PublicKeyVerify),
        key_manager,
        registry,
        new_key_allowed=new_key_allowed,
    )


__all__: list[str] = [
    "SIGN_KEY_TYPES",
    "VERIFY_KEY_TYPES",
    "register_sign_algorithms",
    "register_verify_algorithms",
    "register_standard_algorithms",
    "register_key_manager",
]
