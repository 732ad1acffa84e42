"""
HMAC примитив с усечением тега.

Вычисление через cryptography.hazmat.primitives.hmac, проверка тега
через hmac.compare_digest (constant-time).
"""

from __future__ import annotations

import hmac
import logging
from typing import Dict, Final, Type

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.hmac import HMAC

from src.agility.core.exceptions import InvalidKeyMaterialError
from src.agility.core.key_manager import require_bytes

logger = logging.getLogger(__name__)

# Минимальная длина ключа HMAC (NIST SP 800-107)
MIN_HMAC_KEY_SIZE: Final[int] = 16
MIN_TAG_SIZE: Final[int] = 10

HASH_ALGORITHMS: Final[Dict[str, Type[hashes.HashAlgorithm]]] = {
    "SHA1": hashes.SHA1,
    "SHA256": hashes.SHA256,
    "SHA512": hashes.SHA512,
}


class HmacMac:
    """
    HMAC над выбранной хеш-функцией, тег усекается до tag_size байт.

    Example:
        >>> mac = HmacMac("SHA256", os.urandom(32), 16)
        >>> tag = mac.compute(b"data")
        >>> mac.verify(tag, b"data")
        True
    """

    def __init__(self, hash_name: str, key: bytes, tag_size: int) -> None:
        """
        Raises:
            ValueError: Неизвестная хеш-функция или недопустимый tag_size
            InvalidKeyMaterialError: Ключ короче MIN_HMAC_KEY_SIZE
        """
        if hash_name not in HASH_ALGORITHMS:
            raise ValueError(
                f"Unsupported HMAC hash '{hash_name}'. "
                f"Available: {sorted(HASH_ALGORITHMS)}"
            )

        self._hash = HASH_ALGORITHMS[hash_name]
        digest_size = self._hash.digest_size

        if tag_size < MIN_TAG_SIZE or tag_size > digest_size:
            raise ValueError(
                f"tag_size for HMAC-{hash_name} must be in "
                f"[{MIN_TAG_SIZE}, {digest_size}], got {tag_size}"
            )

        if not isinstance(key, bytes) or len(key) < MIN_HMAC_KEY_SIZE:
            raise InvalidKeyMaterialError(
                f"HMAC key must be at least {MIN_HMAC_KEY_SIZE} bytes",
                algorithm=f"HMAC-{hash_name}",
            )

        self._key = key
        self.tag_size = tag_size

    def compute(self, data: bytes) -> bytes:
        """Вычислить усечённый HMAC тег."""
        require_bytes("data", data)

        h = HMAC(self._key, self._hash())
        h.update(data)
        return h.finalize()[: self.tag_size]

    def verify(self, tag: bytes, data: bytes) -> bool:
        """Проверить тег за постоянное время."""
        require_bytes("tag", tag)
        return hmac.compare_digest(tag, self.compute(data))


__all__: list[str] = ["HmacMac", "HASH_ALGORITHMS"]
