"""
AES-CTR - IND-CPA шифр (non-AEAD).

⚠️  WARNING: NOT AUTHENTICATED ENCRYPTION!
Обеспечивает только конфиденциальность. Используется как составная
часть EncryptThenAuthenticate вместе с HMAC.

Формат шифротекста:
    iv (16 bytes, full AES block as counter) || ciphertext

Compliance:
    - NIST FIPS 197 (AES)
    - NIST SP 800-38A (CTR mode)
"""

from __future__ import annotations

import logging
import os
from typing import Final

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from src.agility.core.exceptions import (
    CiphertextTooShortError,
    EncryptionFailedError,
    InvalidKeyMaterialError,
)
from src.agility.core.key_manager import require_bytes

logger = logging.getLogger(__name__)

AES_CTR_IV_SIZE: Final[int] = 16
AES_KEY_SIZES: Final[tuple[int, ...]] = (16, 32)


class AesCtrCipher:
    """
    AES-CTR со случайным IV на каждое сообщение.

    Example:
        >>> cipher = AesCtrCipher(os.urandom(32))
        >>> ct = cipher.encrypt(b"data")
        >>> cipher.decrypt(ct)
        b'data'
    """

    def __init__(self, key: bytes) -> None:
        """
        Raises:
            InvalidKeyMaterialError: Длина ключа не 16 и не 32 байта
        """
        if not isinstance(key, bytes) or len(key) not in AES_KEY_SIZES:
            raise InvalidKeyMaterialError(
                "AES-CTR requires a 16- or 32-byte key",
                algorithm="AES-CTR",
                actual_size=len(key) if isinstance(key, bytes) else None,
            )
        self._key = key

    def encrypt(self, plaintext: bytes) -> bytes:
        """Зашифровать с новым случайным IV."""
        require_bytes("plaintext", plaintext)

        iv = os.urandom(AES_CTR_IV_SIZE)
        try:
            encryptor = Cipher(algorithms.AES(self._key), modes.CTR(iv)).encryptor()
            return iv + encryptor.update(plaintext) + encryptor.finalize()
        except Exception as e:
            raise EncryptionFailedError("AES-CTR encryption failed", algorithm="AES-CTR") from e

    def decrypt(self, ciphertext: bytes) -> bytes:
        """
        Raises:
            CiphertextTooShortError: Нет полного IV
        """
        require_bytes("ciphertext", ciphertext)

        if len(ciphertext) < AES_CTR_IV_SIZE:
            raise CiphertextTooShortError(
                AES_CTR_IV_SIZE, len(ciphertext), algorithm="AES-CTR"
            )

        iv = ciphertext[:AES_CTR_IV_SIZE]
        decryptor = Cipher(algorithms.AES(self._key), modes.CTR(iv)).decryptor()
        return decryptor.update(ciphertext[AES_CTR_IV_SIZE:]) + decryptor.finalize()


__all__: list[str] = ["AesCtrCipher", "AES_CTR_IV_SIZE"]
