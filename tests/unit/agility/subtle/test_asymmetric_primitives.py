"""
Unit-тесты асимметричных примитивов: ECIES X25519 и подписи.
"""

from __future__ import annotations

import os

import pytest
from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
)

from src.agility.core.exceptions import (
    AuthenticationFailedError,
    CiphertextTooShortError,
    InvalidKeyMaterialError,
)
from src.agility.core.protocols import (
    HybridDecrypt,
    HybridEncrypt,
    PublicKeySign,
    PublicKeyVerify,
)
from src.agility.subtle.aead import AesGcmAead
from src.agility.subtle.ecies import (
    X25519_KEY_SIZE,
    EciesX25519HybridDecrypt,
    EciesX25519HybridEncrypt,
    x25519_public_from_private,
)
from src.agility.subtle.signature import (
    EcdsaP256Sign,
    EcdsaP256Verify,
    Ed25519Sign,
    Ed25519Verify,
    ed25519_public_from_private,
    p256_public_from_private,
)


# ==============================================================================
# FIXTURES
# ==============================================================================


@pytest.fixture
def x25519_keypair() -> tuple[bytes, bytes]:
    private_key = X25519PrivateKey.generate().private_bytes(
        Encoding.Raw, PrivateFormat.Raw, NoEncryption()
    )
    return private_key, x25519_public_from_private(private_key)


# ==============================================================================
# ECIES
# ==============================================================================


class TestEcies:
    """Тесты ECIES X25519 + HKDF-SHA256 с AES-128-GCM в качестве DEM."""

    def test_round_trip(self, x25519_keypair: tuple[bytes, bytes]) -> None:
        private_key, public_key = x25519_keypair
        encrypter = EciesX25519HybridEncrypt(public_key, AesGcmAead, 16)
        decrypter = EciesX25519HybridDecrypt(private_key, AesGcmAead, 16)

        ciphertext = encrypter.encrypt(b"hello", b"info")

        assert isinstance(encrypter, HybridEncrypt)
        assert isinstance(decrypter, HybridDecrypt)
        assert len(ciphertext) == X25519_KEY_SIZE + 12 + 5 + 16
        assert decrypter.decrypt(ciphertext, b"info") == b"hello"

    def test_context_info_bound(self, x25519_keypair: tuple[bytes, bytes]) -> None:
        private_key, public_key = x25519_keypair
        ciphertext = EciesX25519HybridEncrypt(public_key, AesGcmAead, 16).encrypt(
            b"hello", b"info"
        )

        with pytest.raises(AuthenticationFailedError):
            EciesX25519HybridDecrypt(private_key, AesGcmAead, 16).decrypt(
                ciphertext, b"other"
            )

    def test_wrong_recipient(self, x25519_keypair: tuple[bytes, bytes]) -> None:
        _, public_key = x25519_keypair
        ciphertext = EciesX25519HybridEncrypt(public_key, AesGcmAead, 16).encrypt(
            b"hello", b""
        )
        stranger = X25519PrivateKey.generate().private_bytes(
            Encoding.Raw, PrivateFormat.Raw, NoEncryption()
        )

        with pytest.raises(AuthenticationFailedError):
            EciesX25519HybridDecrypt(stranger, AesGcmAead, 16).decrypt(ciphertext, b"")

    def test_ephemeral_key_per_message(self, x25519_keypair: tuple[bytes, bytes]) -> None:
        _, public_key = x25519_keypair
        encrypter = EciesX25519HybridEncrypt(public_key, AesGcmAead, 16)

        first = encrypter.encrypt(b"hello", b"")
        second = encrypter.encrypt(b"hello", b"")

        assert first[:X25519_KEY_SIZE] != second[:X25519_KEY_SIZE]

    def test_short_ciphertext(self, x25519_keypair: tuple[bytes, bytes]) -> None:
        private_key, _ = x25519_keypair

        with pytest.raises(CiphertextTooShortError):
            EciesX25519HybridDecrypt(private_key, AesGcmAead, 16).decrypt(
                b"\x01" * (X25519_KEY_SIZE - 1), b""
            )

    def test_low_order_point_rejected(self, x25519_keypair: tuple[bytes, bytes]) -> None:
        """Нулевая точка даёт нулевой shared secret и отвергается."""
        private_key, _ = x25519_keypair

        with pytest.raises(AuthenticationFailedError):
            EciesX25519HybridDecrypt(private_key, AesGcmAead, 16).decrypt(
                b"\x00" * X25519_KEY_SIZE + os.urandom(40), b""
            )

    def test_invalid_public_key(self) -> None:
        with pytest.raises(InvalidKeyMaterialError):
            EciesX25519HybridEncrypt(b"\x01" * 31, AesGcmAead, 16)

    def test_invalid_private_key(self) -> None:
        with pytest.raises(InvalidKeyMaterialError):
            x25519_public_from_private(b"\x01" * 5)


# ==============================================================================
# SIGNATURES
# ==============================================================================


class TestEd25519:
    def test_sign_verify(self) -> None:
        private_key = os.urandom(32)
        signer = Ed25519Sign(private_key)
        verifier = Ed25519Verify(ed25519_public_from_private(private_key))

        signature = signer.sign(b"data")

        assert isinstance(signer, PublicKeySign)
        assert isinstance(verifier, PublicKeyVerify)
        assert len(signature) == 64
        assert verifier.verify(signature, b"data") is True

    def test_deterministic(self) -> None:
        signer = Ed25519Sign(os.urandom(32))

        assert signer.sign(b"data") == signer.sign(b"data")

    def test_verify_returns_false_on_tampering(self) -> None:
        private_key = os.urandom(32)
        verifier = Ed25519Verify(ed25519_public_from_private(private_key))
        signature = Ed25519Sign(private_key).sign(b"data")

        assert verifier.verify(signature, b"other") is False
        assert verifier.verify(bytes(64), b"data") is False

    def test_invalid_private_key(self) -> None:
        with pytest.raises(InvalidKeyMaterialError):
            Ed25519Sign(b"\x01" * 31)


class TestEcdsaP256:
    def test_sign_verify(self) -> None:
        private_key = (12345).to_bytes(32, "big")
        public_key = p256_public_from_private(private_key)

        signature = EcdsaP256Sign(private_key).sign(b"data")

        assert len(public_key) == 65
        assert public_key[0] == 0x04
        assert EcdsaP256Verify(public_key).verify(signature, b"data") is True
        assert EcdsaP256Verify(public_key).verify(signature, b"other") is False

    def test_zero_scalar_rejected(self) -> None:
        with pytest.raises(InvalidKeyMaterialError):
            EcdsaP256Sign(bytes(32))

    def test_wrong_scalar_length(self) -> None:
        with pytest.raises(InvalidKeyMaterialError) as exc_info:
            EcdsaP256Sign(b"\x01" * 31)

        assert exc_info.value.expected_size == 32

    def test_invalid_point(self) -> None:
        with pytest.raises(InvalidKeyMaterialError):
            EcdsaP256Verify(b"\x04" + b"\x01" * 64)
