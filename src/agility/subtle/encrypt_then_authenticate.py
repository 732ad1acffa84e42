"""
Encrypt-then-Authenticate: AEAD из IND-CPA шифра и MAC.

Композитный примитив, построенный по draft-mcgrew-aead-aes-cbc-hmac-sha2:
plaintext шифруется IND-CPA шифром, затем MAC вычисляется над

    associated_data || ciphertext || uint64_be(8 * len(associated_data))

Длина associated_data в битах входит в MAC, поэтому байты нельзя
переносить между associated_data и ciphertext двух сообщений без
изменения тега (Horton Principle).

Формат шифротекста:
    +--------------------------+------------------+
    | cipher_output (variable) | mac_tag (tag_size) |
    +--------------------------+------------------+

Security:
    - Тег проверяется ДО расшифровки (authenticate-before-decrypt)
    - Сравнение тегов выполняется MAC примитивом за постоянное время
    - Экземпляр не хранит изменяемого состояния: безопасен для
      одновременного вызова из нескольких потоков

Example:
    >>> aead = EncryptThenAuthenticate(AesCtrCipher(aes_key), HmacMac(...), 16)
    >>> ct = aead.encrypt(b"hello", b"ctx")
    >>> aead.decrypt(ct, b"ctx")
    b'hello'
"""

from __future__ import annotations

import asyncio
import logging
import struct
from typing import Final, Optional

from src.agility.core.exceptions import (
    AuthenticationFailedError,
    CiphertextTooShortError,
)
from src.agility.core.key_manager import require_bytes
from src.agility.core.protocols import IndCpaCipher, Mac

logger = logging.getLogger(__name__)

# 64-bit unsigned big-endian
_AAD_BITS_FORMAT: Final[str] = ">Q"


def aad_length_tag(associated_data: bytes) -> bytes:
    """
    Закодировать длину associated_data в битах (8 байт, big-endian).

    Example:
        >>> aad_length_tag(b"ctx")
        b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x18'
    """
    return struct.pack(_AAD_BITS_FORMAT, 8 * len(associated_data))


class EncryptThenAuthenticate:
    """
    AEAD примитив Encrypt-then-MAC.

    Attributes:
        tag_size: Фиксированная длина MAC тега в байтах
    """

    def __init__(self, cipher: IndCpaCipher, mac: Mac, tag_size: int) -> None:
        """
        Args:
            cipher: IND-CPA шифр (отвечает за IV и конфиденциальность)
            mac: MAC примитив
            tag_size: Длина тега, которую возвращает mac.compute()

        Raises:
            ValueError: tag_size <= 0
        """
        if tag_size <= 0:
            raise ValueError(f"tag_size must be positive, got {tag_size}")

        self._cipher = cipher
        self._mac = mac
        self.tag_size = tag_size

    def encrypt(self, plaintext: bytes, associated_data: Optional[bytes] = None) -> bytes:
        """
        Зашифровать plaintext и аутентифицировать associated_data.

        Associated data аутентифицируется, но НЕ шифруется.

        Returns:
            cipher_output || mac_tag
        """
        if associated_data is None:
            associated_data = b""
        require_bytes("plaintext", plaintext)
        require_bytes("associated_data", associated_data)

        ciphertext = self._cipher.encrypt(plaintext)
        tag = self._mac.compute(
            associated_data + ciphertext + aad_length_tag(associated_data)
        )
        return ciphertext + tag

    def decrypt(self, ciphertext: bytes, associated_data: Optional[bytes] = None) -> bytes:
        """
        Проверить тег и расшифровать.

        Raises:
            CiphertextTooShortError: len(ciphertext) < tag_size
            AuthenticationFailedError: Тег не совпал
        """
        if associated_data is None:
            associated_data = b""
        require_bytes("ciphertext", ciphertext)
        require_bytes("associated_data", associated_data)

        if len(ciphertext) < self.tag_size:
            raise CiphertextTooShortError(self.tag_size, len(ciphertext))

        split = len(ciphertext) - self.tag_size
        raw_ciphertext = ciphertext[:split]
        tag = ciphertext[split:]

        if not self._mac.verify(
            tag, associated_data + raw_ciphertext + aad_length_tag(associated_data)
        ):
            logger.debug("Encrypt-then-Authenticate: MAC verification failed")
            raise AuthenticationFailedError("MAC verification failed")

        return self._cipher.decrypt(raw_ciphertext)

    async def encrypt_async(
        self, plaintext: bytes, associated_data: Optional[bytes] = None
    ) -> bytes:
        """encrypt() в рабочем потоке, не блокируя event loop."""
        return await asyncio.to_thread(self.encrypt, plaintext, associated_data)

    async def decrypt_async(
        self, ciphertext: bytes, associated_data: Optional[bytes] = None
    ) -> bytes:
        """decrypt() в рабочем потоке, не блокируя event loop."""
        return await asyncio.to_thread(self.decrypt, ciphertext, associated_data)


__all__: list[str] = [
    "EncryptThenAuthenticate",
    "aad_length_tag",
]
