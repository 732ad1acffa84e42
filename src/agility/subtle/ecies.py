"""
ECIES на X25519 с HKDF-SHA256 и подключаемым DEM (AEAD).

Шифрование:
    1. Сгенерировать ephemeral X25519 keypair
    2. shared = X25519(ephemeral_private, recipient_public)
    3. dem_key = HKDF-SHA256(ikm = ephemeral_public || shared,
                             salt = hkdf_salt, info = context_info)
    4. dem_ct = DEM(dem_key).encrypt(plaintext, b"")
    5. Результат: ephemeral_public (32 bytes) || dem_ct

DEM строится фабрикой dem_factory(dem_key) -> Aead; менеджеры ключей
передают сюда фабрику, которая разрешает AEAD через реестр.

References:
    - RFC 7748: X25519
    - RFC 5869: HKDF
"""

from __future__ import annotations

import logging
from typing import Callable, Final, Optional

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric.x25519 import (
    X25519PrivateKey,
    X25519PublicKey,
)
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from src.agility.core.exceptions import (
    AuthenticationFailedError,
    CiphertextTooShortError,
    InvalidKeyMaterialError,
)
from src.agility.core.key_manager import require_bytes
from src.agility.core.protocols import Aead

logger = logging.getLogger(__name__)

X25519_KEY_SIZE: Final[int] = 32

DemFactory = Callable[[bytes], Aead]


def _derive_dem_key(
    ephemeral_public: bytes,
    shared_secret: bytes,
    salt: bytes,
    context_info: bytes,
    length: int,
) -> bytes:
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=length,
        salt=salt if salt else None,
        info=context_info,
    )
    return hkdf.derive(ephemeral_public + shared_secret)


def _raw_public(key: X25519PublicKey) -> bytes:
    return key.public_bytes(encoding=Encoding.Raw, format=PublicFormat.Raw)


class EciesX25519HybridEncrypt:
    """
    Гибридное шифрование на публичном ключе получателя.

    Attributes:
        dem_key_size: Длина ключа DEM, выводимого HKDF
    """

    def __init__(
        self,
        recipient_public_key: bytes,
        dem_factory: DemFactory,
        dem_key_size: int,
        hkdf_salt: bytes = b"",
    ) -> None:
        try:
            self._recipient = X25519PublicKey.from_public_bytes(recipient_public_key)
        except ValueError as e:
            raise InvalidKeyMaterialError(
                "Invalid X25519 public key", algorithm="X25519"
            ) from e
        self._dem_factory = dem_factory
        self._salt = hkdf_salt
        self.dem_key_size = dem_key_size

    def encrypt(self, plaintext: bytes, context_info: Optional[bytes] = None) -> bytes:
        if context_info is None:
            context_info = b""
        require_bytes("plaintext", plaintext)
        require_bytes("context_info", context_info)

        ephemeral = X25519PrivateKey.generate()
        ephemeral_public = _raw_public(ephemeral.public_key())
        shared_secret = ephemeral.exchange(self._recipient)

        dem_key = _derive_dem_key(
            ephemeral_public, shared_secret, self._salt, context_info, self.dem_key_size
        )
        dem_ciphertext = self._dem_factory(dem_key).encrypt(plaintext, b"")

        logger.debug(f"ECIES: encrypted {len(plaintext)} bytes")
        return ephemeral_public + dem_ciphertext


class EciesX25519HybridDecrypt:
    """Гибридная расшифровка на приватном ключе получателя."""

    def __init__(
        self,
        recipient_private_key: bytes,
        dem_factory: DemFactory,
        dem_key_size: int,
        hkdf_salt: bytes = b"",
    ) -> None:
        try:
            self._private = X25519PrivateKey.from_private_bytes(recipient_private_key)
        except ValueError as e:
            raise InvalidKeyMaterialError(
                "Invalid X25519 private key", algorithm="X25519"
            ) from e
        self._dem_factory = dem_factory
        self._salt = hkdf_salt
        self.dem_key_size = dem_key_size

    def decrypt(self, ciphertext: bytes, context_info: Optional[bytes] = None) -> bytes:
        """
        Raises:
            CiphertextTooShortError: Нет полного ephemeral public key
            AuthenticationFailedError: Некорректная точка или DEM не прошёл проверку
        """
        if context_info is None:
            context_info = b""
        require_bytes("ciphertext", ciphertext)
        require_bytes("context_info", context_info)

        if len(ciphertext) < X25519_KEY_SIZE:
            raise CiphertextTooShortError(
                X25519_KEY_SIZE, len(ciphertext), algorithm="ECIES-X25519"
            )

        ephemeral_public = ciphertext[:X25519_KEY_SIZE]
        try:
            shared_secret = self._private.exchange(
                X25519PublicKey.from_public_bytes(ephemeral_public)
            )
        except ValueError as e:
            # Нулевой shared secret (точка малого порядка)
            raise AuthenticationFailedError(
                "ECIES decryption failed", algorithm="ECIES-X25519"
            ) from e

        dem_key = _derive_dem_key(
            ephemeral_public, shared_secret, self._salt, context_info, self.dem_key_size
        )
        return self._dem_factory(dem_key).decrypt(ciphertext[X25519_KEY_SIZE:], b"")


def x25519_public_from_private(private_key: bytes) -> bytes:
    """
    Вывести 32-байтный публичный ключ X25519 из приватного.

    Raises:
        InvalidKeyMaterialError: Некорректный приватный ключ
    """
    try:
        private = X25519PrivateKey.from_private_bytes(private_key)
    except (TypeError, ValueError) as e:
        raise InvalidKeyMaterialError(
            "Invalid X25519 private key", algorithm="X25519"
        ) from e
    return _raw_public(private.public_key())


__all__: list[str] = [
    "EciesX25519HybridEncrypt",
    "EciesX25519HybridDecrypt",
    "x25519_public_from_private",
    "X25519_KEY_SIZE",
]
