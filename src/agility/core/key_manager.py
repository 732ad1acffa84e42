"""
Общие помощники для менеджеров ключей.

RawKeyManager покрывает самый частый случай: ключевой материал - это
случайная строка байт фиксированной длины (AES, ChaCha20, HMAC).
Менеджеры с составным или асимметричным ключом переопределяют validate()
и generate().
"""

from __future__ import annotations

import logging
import os
from typing import Any, ClassVar

from src.agility.core.exceptions import InvalidKeyMaterialError, KeyGenerationError

logger = logging.getLogger(__name__)


def require_bytes(name: str, value: Any) -> None:
    """
    Проверить, что аргумент имеет тип bytes.

    Raises:
        TypeError: value не bytes
    """
    if not isinstance(value, bytes):
        raise TypeError(f"{name} must be bytes, got {type(value).__name__}")


class BaseKeyManager:
    """
    Базовый класс менеджера ключей.

    Подклассы задают key_type, primitive и реализуют validate()
    и _build(). primitive_from() всегда вызывает validate() перед
    построением примитива.
    """

    key_type: ClassVar[str]
    primitive: ClassVar[type]
    supports_generation: ClassVar[bool] = True

    def validate(self, key_material: bytes) -> None:
        raise NotImplementedError

    def _build(self, key_material: bytes) -> Any:
        raise NotImplementedError

    def primitive_from(self, key_material: bytes) -> Any:
        """
        Построить примитив из ключевого материала.

        Raises:
            InvalidKeyMaterialError: Ключ не прошёл validate()
        """
        self.validate(key_material)
        instance = self._build(key_material)
        logger.debug(f"Built {self.primitive.__name__} primitive for {self.key_type}")
        return instance

    def generate(self) -> bytes:
        raise KeyGenerationError(
            f"{self.key_type} does not support key generation",
            algorithm=self.key_type,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(key_type={self.key_type!r})"


class RawKeyManager(BaseKeyManager):
    """
    Менеджер для ключей вида «KEY_SIZE случайных байт».

    Example:
        >>> class AesGcm128KeyManager(RawKeyManager):
        ...     key_type = "AES-128-GCM"
        ...     primitive = Aead
        ...     KEY_SIZE = 16
    """

    KEY_SIZE: ClassVar[int]

    def validate(self, key_material: bytes) -> None:
        if not isinstance(key_material, bytes):
            raise InvalidKeyMaterialError(
                f"Key material must be bytes, got {type(key_material).__name__}",
                algorithm=self.key_type,
            )

        if len(key_material) != self.KEY_SIZE:
            raise InvalidKeyMaterialError(
                f"{self.key_type} requires {self.KEY_SIZE}-byte key material, "
                f"got {len(key_material)}",
                algorithm=self.key_type,
                expected_size=self.KEY_SIZE,
                actual_size=len(key_material),
            )

    def generate(self) -> bytes:
        return os.urandom(self.KEY_SIZE)


__all__: list[str] = [
    "BaseKeyManager",
    "RawKeyManager",
    "require_bytes",
]
