"""
Общая логика загрузчиков конфигурации.

Загрузчик регистрирует стандартные менеджеры с new_key_allowed=True,
затем устаревшие с new_key_allowed=False. Повторный вызов - no-op,
так как реестр принимает повторную регистрацию менеджера того же класса.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from src.agility.core.exceptions import PrimitiveMismatchError
from src.agility.core.protocols import KeyManager
from src.agility.core.registry import Registry

logger = logging.getLogger(__name__)

CONFIG_VERSION = "1.0.0"


def resolve_registry(registry: Optional[Registry]) -> Registry:
    """Явно переданный реестр или общий реестр процесса."""
    return registry if registry is not None else Registry.get_instance()


def register_typed_key_manager(
    primitives: Tuple[type, ...],
    key_manager: KeyManager,
    registry: Optional[Registry],
    *,
    new_key_allowed: bool = True,
) -> None:
    """
    Зарегистрировать менеджер, проверив тип производимого примитива.

    Raises:
        PrimitiveMismatchError: Менеджер производит примитив другого типа
        DuplicateRegistrationError: Конфликт с существующей записью
    """
    if key_manager.primitive not in primitives:
        raise PrimitiveMismatchError(
            key_manager.key_type,
            " | ".join(p.__name__ for p in primitives),
            key_manager.primitive.__name__,
        )
    resolve_registry(registry).register_key_manager(
        key_manager, new_key_allowed=new_key_allowed
    )


def register_key_managers(
    config_name: str,
    registry: Registry,
    standard: Iterable[KeyManager],
    deprecated: Iterable[KeyManager] = (),
) -> None:
    """
    Зарегистрировать стандартные и устаревшие менеджеры.

    Raises:
        DuplicateRegistrationError: Идентификатор занят чужим менеджером
    """
    standard = list(standard)
    deprecated = list(deprecated)

    for manager in standard:
        registry.register_key_manager(manager, new_key_allowed=True)

    for manager in deprecated:
        registry.register_key_manager(manager, new_key_allowed=False)

    logger.debug(
        f"{config_name} v{CONFIG_VERSION}: {len(standard)} standard, "
        f"{len(deprecated)} decrypt-only key managers"
    )


__all__: list[str] = [
    "CONFIG_VERSION",
    "register_key_managers",
    "register_typed_key_manager",
    "resolve_registry",
]
