"""
Менеджеры ключей MAC (HMAC).

Идентификатор кодирует хеш-функцию и длину тега в битах:
    HMAC-SHA256-128  - SHA-256, тег 16 байт (для Encrypt-then-Authenticate)
    HMAC-SHA256-256  - SHA-256, тег 32 байта
    HMAC-SHA512-256  - SHA-512, тег 32 байта
    HMAC-SHA1-160    - LEGACY: только для существующих ключей

Ключевой материал: KEY_SIZE случайных байт.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from src.agility.core.key_manager import RawKeyManager
from src.agility.core.protocols import Mac
from src.agility.subtle.hmac_mac import HmacMac

logger = logging.getLogger(__name__)


class _HmacKeyManager(RawKeyManager):
    primitive = Mac
    HASH: ClassVar[str]
    TAG_SIZE: ClassVar[int]

    def _build(self, key_material: bytes) -> HmacMac:
        return HmacMac(self.HASH, key_material, self.TAG_SIZE)


class HmacSha256Tag128KeyManager(_HmacKeyManager):
    key_type = "HMAC-SHA256-128"
    HASH = "SHA256"
    KEY_SIZE = 32
    TAG_SIZE = 16


class HmacSha256Tag256KeyManager(_HmacKeyManager):
    key_type = "HMAC-SHA256-256"
    HASH = "SHA256"
    KEY_SIZE = 32
    TAG_SIZE = 32


class HmacSha512Tag256KeyManager(_HmacKeyManager):
    key_type = "HMAC-SHA512-256"
    HASH = "SHA512"
    KEY_SIZE = 64
    TAG_SIZE = 32


class HmacSha1KeyManager(_HmacKeyManager):
    """
    HMAC-SHA1 - LEGACY.

    Регистрируется без права генерации новых ключей: старые теги
    по-прежнему проверяются, новые ключи не выдаются.
    """

    key_type = "HMAC-SHA1-160"
    HASH = "SHA1"
    KEY_SIZE = 20
    TAG_SIZE = 20


__all__: list[str] = [
    "HmacSha256Tag128KeyManager",
    "HmacSha256Tag256KeyManager",
    "HmacSha512Tag256KeyManager",
    "HmacSha1KeyManager",
]
