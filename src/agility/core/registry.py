"""
Реестр менеджеров ключей.

Отображение «идентификатор алгоритма → менеджер ключей» с политикой
конфликтов и контролем понижения (downgrade control). Обеспечивает:
- Регистрацию менеджеров с проверкой конфликтов
- Флаг «новые ключи разрешены» для вывода алгоритмов из оборота
- Построение примитивов из сериализованного ключевого материала
- Thread-safe доступ (RLock)

Реестр можно создать явно и передавать в загрузчики (dependency injection),
либо пользоваться общим экземпляром процесса через get_instance().

Example:
    >>> from src.agility.core.registry import Registry
    >>> registry = Registry()
    >>> registry.register("AES-128-GCM", AesGcm128KeyManager())
    >>> key = registry.generate_new_key("AES-128-GCM")
    >>> aead = registry.primitive_for("AES-128-GCM", key, Aead)

Thread Safety:
    Все публичные методы thread-safe благодаря RLock. Запись в реестр
    атомарна: читатель видит либо старую, либо полностью установленную
    новую запись.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from src.agility.core.exceptions import (
    DuplicateRegistrationError,
    GenerationForbiddenError,
    PrimitiveMismatchError,
    UnknownAlgorithmError,
)
from src.agility.core.protocols import KeyManager, PrivateKeyManager

logger = logging.getLogger(__name__)


# ==============================================================================
# DATACLASSES
# ==============================================================================


@dataclass(frozen=True)
class RegistryEntry:
    """
    Запись реестра.

    Attributes:
        key_type: Идентификатор алгоритма
        key_manager: Менеджер ключей
        new_key_allowed: Разрешена ли генерация новых ключей
    """

    key_type: str
    key_manager: KeyManager
    new_key_allowed: bool


# ==============================================================================
# MAIN CLASS: REGISTRY
# ==============================================================================


class Registry:
    """
    Thread-safe реестр менеджеров ключей.

    Правила регистрации:
        - Новый идентификатор вставляется безусловно.
        - Повторная регистрация проходит молча, только если менеджер
          того же класса и флаг new_key_allowed не ослабляется.
        - Иначе DuplicateRegistrationError.

    Attributes:
        _instance: Общий экземпляр процесса
        _instance_lock: Lock для ленивой инициализации _instance
        _entries: Словарь {key_type -> RegistryEntry}
    """

    _instance: Optional[Registry] = None
    _instance_lock: threading.Lock = threading.Lock()

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._entries: Dict[str, RegistryEntry] = {}

    @classmethod
    def get_instance(cls) -> Registry:
        """
        Получить общий реестр процесса.

        Thread Safety:
            Thread-safe double-checked locking

        Example:
            >>> Registry.get_instance() is Registry.get_instance()
            True
        """
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
                    logger.info("Process-wide Registry initialized")
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """
        Сбросить общий реестр (только для тестов).

        WARNING:
            Используйте только в unit-тестах!
        """
        with cls._instance_lock:
            cls._instance = None
            logger.warning("Process-wide Registry reset (testing only!)")

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        key_type: str,
        key_manager: KeyManager,
        *,
        new_key_allowed: bool = True,
    ) -> None:
        """
        Зарегистрировать менеджер ключей под идентификатором.

        Args:
            key_type: Идентификатор алгоритма
            key_manager: Менеджер ключей для этого идентификатора
            new_key_allowed: Разрешить генерацию новых ключей

        Raises:
            ValueError: Пустой идентификатор или он не совпадает
                с key_manager.key_type
            TypeError: key_manager не реализует KeyManager
            DuplicateRegistrationError: Конфликт с существующей записью

        Example:
            >>> registry.register("HMAC-SHA1-160", HmacSha1KeyManager(),
            ...                   new_key_allowed=False)
        """
        if not key_type or not key_type.strip():
            raise ValueError("Идентификатор алгоритма не может быть пустым")

        if not isinstance(key_manager, KeyManager):
            raise TypeError(
                f"key_manager должен реализовывать KeyManager, "
                f"получено {type(key_manager).__name__}"
            )

        if key_manager.key_type != key_type:
            raise ValueError(
                f"Менеджер {type(key_manager).__name__} обслуживает "
                f"'{key_manager.key_type}', а не '{key_type}'"
            )

        with self._lock:
            existing = self._entries.get(key_type)

            if existing is not None:
                self._check_compatible(existing, key_manager, new_key_allowed)
                logger.debug(f"Re-registration of {key_type} is a no-op")
                return

            self._entries[key_type] = RegistryEntry(
                key_type=key_type,
                key_manager=key_manager,
                new_key_allowed=new_key_allowed,
            )

        logger.info(
            f"Registered key manager: {key_type} "
            f"({type(key_manager).__name__}, new_key_allowed={new_key_allowed})"
        )

    def register_key_manager(
        self,
        key_manager: KeyManager,
        *,
        new_key_allowed: bool = True,
    ) -> None:
        """Зарегистрировать менеджер под его собственным key_type."""
        self.register(
            key_manager.key_type, key_manager, new_key_allowed=new_key_allowed
        )

    def _check_compatible(
        self,
        existing: RegistryEntry,
        key_manager: KeyManager,
        new_key_allowed: bool,
    ) -> None:
        """Проверить, что повторная регистрация не конфликтует с записью."""
        if type(existing.key_manager) is not type(key_manager):
            logger.warning(
                f"Rejected registration of {type(key_manager).__name__} "
                f"for {existing.key_type}: "
                f"{type(existing.key_manager).__name__} already registered"
            )
            raise DuplicateRegistrationError(
                existing.key_type,
                f"registered with {type(existing.key_manager).__name__}, "
                f"got {type(key_manager).__name__}",
            )

        if new_key_allowed and not existing.new_key_allowed:
            logger.warning(
                f"Rejected attempt to re-enable new keys for {existing.key_type}"
            )
            raise DuplicateRegistrationError(
                existing.key_type,
                "new key generation was forbidden and cannot be re-enabled",
            )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def _get_entry(self, key_type: str) -> RegistryEntry:
        with self._lock:
            entry = self._entries.get(key_type)
            if entry is None:
                raise UnknownAlgorithmError(key_type, sorted(self._entries))
            return entry

    def get_key_manager(self, key_type: str) -> KeyManager:
        """
        Получить менеджер ключей по идентификатору.

        Raises:
            UnknownAlgorithmError: Идентификатор не зарегистрирован
        """
        return self._get_entry(key_type).key_manager

    def primitive_for(
        self,
        key_type: str,
        key_material: bytes,
        primitive: Optional[type] = None,
    ) -> Any:
        """
        Построить примитив из сериализованного ключевого материала.

        Args:
            key_type: Идентификатор алгоритма
            key_material: Ключевой материал
            primitive: Ожидаемый протокол примитива (Aead, Mac, ...);
                None отключает проверку

        Returns:
            Примитив, привязанный к ключу

        Raises:
            UnknownAlgorithmError: Идентификатор не зарегистрирован
            PrimitiveMismatchError: Менеджер производит другой примитив
            InvalidKeyMaterialError: Ключ отклонён менеджером

        Example:
            >>> mac = registry.primitive_for("HMAC-SHA256-256", key, Mac)
        """
        manager = self.get_key_manager(key_type)

        if primitive is not None and manager.primitive is not primitive:
            raise PrimitiveMismatchError(
                key_type, primitive.__name__, manager.primitive.__name__
            )

        # Построение примитива выполняется вне lock
        return manager.primitive_from(key_material)

    def generate_new_key(self, key_type: str) -> bytes:
        """
        Сгенерировать новый ключевой материал.

        Raises:
            UnknownAlgorithmError: Идентификатор не зарегистрирован
            GenerationForbiddenError: Алгоритм зарегистрирован только для
                существующих ключей или менеджер не умеет генерировать ключи
        """
        entry = self._get_entry(key_type)

        if not entry.new_key_allowed:
            logger.warning(f"Refused new key generation for deprecated {key_type}")
            raise GenerationForbiddenError(
                key_type, "registered for existing keys only"
            )

        if not entry.key_manager.supports_generation:
            raise GenerationForbiddenError(
                key_type, "key manager does not generate keys"
            )

        logger.debug(f"Generating new key for {key_type}")
        return entry.key_manager.generate()

    def get_public_key(self, key_type: str, private_key: bytes) -> bytes:
        """
        Вывести публичный ключ из приватного.

        Raises:
            UnknownAlgorithmError: Идентификатор не зарегистрирован
            PrimitiveMismatchError: Менеджер не является PrivateKeyManager
            InvalidKeyMaterialError: Приватный ключ некорректен
        """
        manager = self.get_key_manager(key_type)

        if not isinstance(manager, PrivateKeyManager):
            raise PrimitiveMismatchError(
                key_type, "PrivateKeyManager", type(manager).__name__
            )

        return manager.public_key(private_key)

    def is_registered(self, key_type: str) -> bool:
        """Проверка, зарегистрирован ли идентификатор."""
        with self._lock:
            return key_type in self._entries

    def new_key_allowed(self, key_type: str) -> bool:
        """
        Разрешена ли генерация новых ключей.

        Raises:
            UnknownAlgorithmError: Идентификатор не зарегистрирован
        """
        return self._get_entry(key_type).new_key_allowed

    def list_key_types(self) -> List[str]:
        """Получить отсортированный список зарегистрированных идентификаторов."""
        with self._lock:
            return sorted(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def get_registry() -> Registry:
    """Сокращение для Registry.get_instance()."""
    return Registry.get_instance()


__all__: list[str] = [
    "Registry",
    "RegistryEntry",
    "get_registry",
]
