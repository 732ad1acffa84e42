"""
Загрузчик MAC алгоритмов.

Example:
    >>> from src.agility.config import mac_config
    >>> mac_config.register_standard_algorithms(registry)
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from src.agility.algorithms.mac import (
    HmacSha1KeyManager,
    HmacSha256Tag128KeyManager,
    HmacSha256Tag256KeyManager,
    HmacSha512Tag256KeyManager,
)
from src.agility.config.base import (
    register_key_managers,
    register_typed_key_manager,
    resolve_registry,
)
from src.agility.core.protocols import KeyManager, Mac
from src.agility.core.registry import Registry

STANDARD_KEY_TYPES: Tuple[str, ...] = (
    "HMAC-SHA256-128",
    "HMAC-SHA256-256",
    "HMAC-SHA512-256",
)
DEPRECATED_KEY_TYPES: Tuple[str, ...] = ("HMAC-SHA1-160",)


def standard_key_managers() -> List[KeyManager]:
    return [
        HmacSha256Tag128KeyManager(),
        HmacSha256Tag256KeyManager(),
        HmacSha512Tag256KeyManager(),
    ]


def deprecated_key_managers() -> List[KeyManager]:
    return [HmacSha1KeyManager()]


def register_standard_algorithms(registry: Optional[Registry] = None) -> None:
    """
    Зарегистрировать MAC алгоритмы текущего релиза.

    Устаревшие алгоритмы регистрируются в режиме «без новых ключей»:
    существующие ключи работают, генерация новых запрещена.
    """
    registry = resolve_registry(registry)
    register_key_managers(
        "MacConfig", registry, standard_key_managers(), deprecated_key_managers()
    )


def register_key_manager(
    key_manager: KeyManager,
    registry: Optional[Registry] = None,
    *,
    new_key_allowed: bool = True,
) -> None:
    """Зарегистрировать пользовательский менеджер, производящий Mac."""
    register_typed_key_manager(
        (Mac,), key_manager, registry, new_key_allowed=new_key_allowed
    )


__all__: list[str] = [
    "STANDARD_KEY_TYPES",
    "DEPRECATED_KEY_TYPES",
    "register_standard_algorithms",
    "register_key_manager",
]
