"""
AEAD примитивы на базе cryptography: AES-GCM и ChaCha20-Poly1305.

Формат шифротекста:
    nonce (12 bytes) || ciphertext || tag (16 bytes)

Nonce генерируется CSPRNG на каждое сообщение.

Compliance:
    - NIST SP 800-38D (GCM mode)
    - RFC 8439 (ChaCha20-Poly1305)
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Final, Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM, ChaCha20Poly1305

from src.agility.core.exceptions import (
    AuthenticationFailedError,
    CiphertextTooShortError,
    EncryptionFailedError,
    InvalidKeyMaterialError,
)
from src.agility.core.key_manager import require_bytes

logger = logging.getLogger(__name__)

NONCE_SIZE: Final[int] = 12
TAG_SIZE: Final[int] = 16


class _NonceAead:
    """Общая логика: nonce-префикс, проверка длины, обёртка ошибок."""

    algorithm_name: str

    def __init__(self, impl: object) -> None:
        self._impl = impl

    def encrypt(self, plaintext: bytes, associated_data: Optional[bytes] = None) -> bytes:
        if associated_data is None:
            associated_data = b""
        require_bytes("plaintext", plaintext)
        require_bytes("associated_data", associated_data)

        nonce = os.urandom(NONCE_SIZE)
        try:
            return nonce + self._impl.encrypt(nonce, plaintext, associated_data)  # type: ignore[attr-defined]
        except Exception as e:
            raise EncryptionFailedError(
                f"{self.algorithm_name} encryption failed",
                algorithm=self.algorithm_name,
            ) from e

    def decrypt(self, ciphertext: bytes, associated_data: Optional[bytes] = None) -> bytes:
        if associated_data is None:
            associated_data = b""
        require_bytes("ciphertext", ciphertext)
        require_bytes("associated_data", associated_data)

        if len(ciphertext) < NONCE_SIZE + TAG_SIZE:
            raise CiphertextTooShortError(
                NONCE_SIZE + TAG_SIZE, len(ciphertext), algorithm=self.algorithm_name
            )

        try:
            return self._impl.decrypt(  # type: ignore[attr-defined]
                ciphertext[:NONCE_SIZE], ciphertext[NONCE_SIZE:], associated_data
            )
        except InvalidTag as e:
            raise AuthenticationFailedError(
                f"{self.algorithm_name} decryption failed",
                algorithm=self.algorithm_name,
            ) from e


def _make_impl(factory: Callable[[bytes], object], key: bytes, name: str) -> object:
    try:
        return factory(key)
    except (TypeError, ValueError) as e:
        raise InvalidKeyMaterialError(
            f"Invalid {name} key", algorithm=name,
            actual_size=len(key) if isinstance(key, bytes) else None,
        ) from e


class AesGcmAead(_NonceAead):
    """
    AES-GCM (16- или 32-байтный ключ).

    Example:
        >>> aead = AesGcmAead(os.urandom(16))
        >>> aead.decrypt(aead.encrypt(b"data", b"ad"), b"ad")
        b'data'
    """

    algorithm_name = "AES-GCM"

    def __init__(self, key: bytes) -> None:
        super().__init__(_make_impl(AESGCM, key, self.algorithm_name))


class ChaCha20Poly1305Aead(_NonceAead):
    """ChaCha20-Poly1305 (32-байтный ключ, RFC 8439)."""

    algorithm_name = "CHACHA20-POLY1305"

    def __init__(self, key: bytes) -> None:
        super().__init__(_make_impl(ChaCha20Poly1305, key, self.algorithm_name))


__all__: list[str] = ["AesGcmAead", "ChaCha20Poly1305Aead", "NONCE_SIZE", "TAG_SIZE"]
