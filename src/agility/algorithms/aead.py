"""
Менеджеры ключей AEAD и IND-CPA шифров.

**AEAD (7 идентификаторов):**
- AES-128-GCM, AES-256-GCM - аппаратное ускорение AES-NI
- CHACHA20-POLY1305 - программно-оптимизированный
- AES-128-CTR-HMAC-SHA256, AES-256-CTR-HMAC-SHA256 - Encrypt-then-Authenticate
- AES-128-CTR-HMAC-SHA1 - LEGACY (только существующие ключи)

**IND-CPA (2 идентификатора, только как часть Encrypt-then-Authenticate):**
- AES-128-CTR, AES-256-CTR

Менеджеры Encrypt-then-Authenticate НЕ строят шифр и MAC напрямую:
части ключа передаются в реестр под идентификаторами CIPHER_KEY_TYPE
и MAC_KEY_TYPE. Поэтому MAC и IND-CPA алгоритмы должны быть
зарегистрированы раньше (см. aead_config).

Ключевой материал Encrypt-then-Authenticate:
    cipher_key (CIPHER_KEY_SIZE) || mac_key (MAC_KEY_SIZE)
"""

from __future__ import annotations

import logging
from typing import ClassVar, Optional

from src.agility.core.key_manager import RawKeyManager
from src.agility.core.protocols import Aead, IndCpaCipher, Mac
from src.agility.core.registry import Registry
from src.agility.subtle.aead import AesGcmAead, ChaCha20Poly1305Aead
from src.agility.subtle.aes_ctr import AesCtrCipher
from src.agility.subtle.encrypt_then_authenticate import EncryptThenAuthenticate

logger = logging.getLogger(__name__)


# ==============================================================================
# IND-CPA CIPHERS
# ==============================================================================


class AesCtr128KeyManager(RawKeyManager):
    key_type = "AES-128-CTR"
    primitive = IndCpaCipher
    KEY_SIZE = 16

    def _build(self, key_material: bytes) -> AesCtrCipher:
        return AesCtrCipher(key_material)


class AesCtr256KeyManager(RawKeyManager):
    key_type = "AES-256-CTR"
    primitive = IndCpaCipher
    KEY_SIZE = 32

    def _build(self, key_material: bytes) -> AesCtrCipher:
        return AesCtrCipher(key_material)


# ==============================================================================
# NATIVE AEAD
# ==============================================================================


class AesGcm128KeyManager(RawKeyManager):
    key_type = "AES-128-GCM"
    primitive = Aead
    KEY_SIZE = 16

    def _build(self, key_material: bytes) -> AesGcmAead:
        return AesGcmAead(key_material)


class AesGcm256KeyManager(RawKeyManager):
    key_type = "AES-256-GCM"
    primitive = Aead
    KEY_SIZE = 32

    def _build(self, key_material: bytes) -> AesGcmAead:
        return AesGcmAead(key_material)


class ChaCha20Poly1305KeyManager(RawKeyManager):
    key_type = "CHACHA20-POLY1305"
    primitive = Aead
    KEY_SIZE = 32

    def _build(self, key_material: bytes) -> ChaCha20Poly1305Aead:
        return ChaCha20Poly1305Aead(key_material)


# ==============================================================================
# ENCRYPT-THEN-AUTHENTICATE
# ==============================================================================


class _EncryptThenAuthenticateKeyManager(RawKeyManager):
    """
    Базовый менеджер для AES-CTR + HMAC.

    Args:
        registry: Реестр для разрешения шифра и MAC; None - общий
            реестр процесса на момент построения примитива
    """

    primitive = Aead
    CIPHER_KEY_TYPE: ClassVar[str]
    CIPHER_KEY_SIZE: ClassVar[int]
    MAC_KEY_TYPE: ClassVar[str]
    MAC_KEY_SIZE: ClassVar[int]
    TAG_SIZE: ClassVar[int]

    def __init__(self, registry: Optional[Registry] = None) -> None:
        self._registry = registry

    def _build(self, key_material: bytes) -> EncryptThenAuthenticate:
        registry = self._registry if self._registry is not None else Registry.get_instance()

        cipher = registry.primitive_for(
            self.CIPHER_KEY_TYPE, key_material[: self.CIPHER_KEY_SIZE], IndCpaCipher
        )
        mac = registry.primitive_for(
            self.MAC_KEY_TYPE, key_material[self.CIPHER_KEY_SIZE :], Mac
        )
        return EncryptThenAuthenticate(cipher, mac, self.TAG_SIZE)


class AesCtr128HmacSha256KeyManager(_EncryptThenAuthenticateKeyManager):
    key_type = "AES-128-CTR-HMAC-SHA256"
    CIPHER_KEY_TYPE = "AES-128-CTR"
    CIPHER_KEY_SIZE = 16
    MAC_KEY_TYPE = "HMAC-SHA256-128"
    MAC_KEY_SIZE = 32
    KEY_SIZE = 48
    TAG_SIZE = 16


class AesCtr256HmacSha256KeyManager(_EncryptThenAuthenticateKeyManager):
    key_type = "AES-256-CTR-HMAC-SHA256"
    CIPHER_KEY_TYPE = "AES-256-CTR"
    CIPHER_KEY_SIZE = 32
    MAC_KEY_TYPE = "HMAC-SHA256-128"
    MAC_KEY_SIZE = 32
    KEY_SIZE = 64
    TAG_SIZE = 16


class AesCtr128HmacSha1KeyManager(_EncryptThenAuthenticateKeyManager):
    """
    AES-128-CTR + HMAC-SHA1 - LEGACY.

    Расшифровывает старые данные через HMAC-SHA1-160, который сам
    зарегистрирован без права генерации новых ключей.
    """

    key_type = "AES-128-CTR-HMAC-SHA1"
    CIPHER_KEY_TYPE = "AES-128-CTR"
    CIPHER_KEY_SIZE = 16
    MAC_KEY_TYPE = "HMAC-SHA1-160"
    MAC_KEY_SIZE = 20
    KEY_SIZE = 36
    TAG_SIZE = 20


__all__: list[str] = [
    "AesCtr128KeyManager",
    "AesCtr256KeyManager",
    "AesGcm128KeyManager",
    "AesGcm256KeyManager",
    "ChaCha20Poly1305KeyManager",
    "AesCtr128HmacSha256KeyManager",
    "AesCtr256HmacSha256KeyManager",
    "AesCtr128HmacSha1KeyManager",
]
