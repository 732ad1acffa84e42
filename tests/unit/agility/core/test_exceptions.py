"""
Unit-тесты для модуля exceptions.py.

Проверяет иерархию наследования, форматирование сообщений и то,
что исключения не раскрывают секретные данные.
"""

from __future__ import annotations

import pytest

from src.agility.core.exceptions import (
    AuthenticationFailedError,
    CiphertextTooShortError,
    CryptoError,
    CryptoKeyError,
    DecryptionError,
    DuplicateRegistrationError,
    EncryptionError,
    EncryptionFailedError,
    GenerationForbiddenError,
    InvalidKeyMaterialError,
    KeyGenerationError,
    PrimitiveMismatchError,
    RegistryError,
    SignatureError,
    SigningFailedError,
    UnknownAlgorithmError,
)


# ==============================================================================
# BASE EXCEPTION TESTS
# ==============================================================================


class TestCryptoError:
    """Тесты базового исключения CryptoError."""

    def test_basic_initialization(self) -> None:
        """Инициализация только с сообщением."""
        error = CryptoError("Test error")

        assert error.message == "Test error"
        assert error.algorithm is None
        assert error.context == {}

    def test_str_without_algorithm_and_context(self) -> None:
        assert str(CryptoError("Test error")) == "CryptoError: Test error"

    def test_str_with_algorithm(self) -> None:
        error = CryptoError("Test error", algorithm="AES-128-GCM")

        assert str(error) == "CryptoError: Test error [algorithm=AES-128-GCM]"

    def test_str_with_algorithm_and_context(self) -> None:
        error = CryptoError(
            "Test error", algorithm="AES-128-GCM", context={"operation": "decrypt"}
        )

        assert str(error) == (
            "CryptoError: Test error [algorithm=AES-128-GCM] (operation=decrypt)"
        )

    def test_repr(self) -> None:
        error = CryptoError("msg", algorithm="X", context={"k": 1})

        assert repr(error) == "CryptoError(message='msg', algorithm='X', context={'k': 1})"

    def test_can_be_caught_as_exception(self) -> None:
        with pytest.raises(Exception):
            raise CryptoError("boom")


# ==============================================================================
# HIERARCHY
# ==============================================================================


class TestHierarchy:
    """Тесты иерархии наследования."""

    @pytest.mark.parametrize(
        "child, parent",
        [
            (RegistryError, CryptoError),
            (UnknownAlgorithmError, RegistryError),
            (DuplicateRegistrationError, RegistryError),
            (GenerationForbiddenError, RegistryError),
            (PrimitiveMismatchError, RegistryError),
            (CryptoKeyError, CryptoError),
            (InvalidKeyMaterialError, CryptoKeyError),
            (KeyGenerationError, CryptoKeyError),
            (EncryptionError, CryptoError),
            (EncryptionFailedError, EncryptionError),
            (DecryptionError, EncryptionError),
            (CiphertextTooShortError, DecryptionError),
            (AuthenticationFailedError, DecryptionError),
            (SignatureError, CryptoError),
            (SigningFailedError, SignatureError),
        ],
    )
    def test_inheritance(self, child: type, parent: type) -> None:
        assert issubclass(child, parent)

    def test_crypto_key_error_does_not_shadow_builtin(self) -> None:
        """CryptoKeyError не является builtin KeyError."""
        assert not issubclass(CryptoKeyError, KeyError)


# ==============================================================================
# REGISTRY ERRORS
# ==============================================================================


class TestUnknownAlgorithmError:
    """Тесты UnknownAlgorithmError."""

    def test_without_available_list(self) -> None:
        error = UnknownAlgorithmError("NOPE")

        assert error.algorithm_name == "NOPE"
        assert error.available == []
        assert "Algorithm 'NOPE' is not registered" in str(error)
        assert error.context["available_count"] == 0

    def test_with_available_list_short(self) -> None:
        error = UnknownAlgorithmError("NOPE", ["A", "B"])

        assert "Available: A, B" in error.message
        assert "total" not in error.message

    def test_with_available_list_long(self) -> None:
        available = [f"ALG-{i}" for i in range(8)]
        error = UnknownAlgorithmError("NOPE", available)

        assert "(8 total)" in error.message
        assert "ALG-5" not in error.message
        assert error.context["available_count"] == 8


class TestDuplicateRegistrationError:
    """Тесты DuplicateRegistrationError."""

    def test_message_and_reason(self) -> None:
        error = DuplicateRegistrationError("AES-128-GCM", "different manager")

        assert error.algorithm == "AES-128-GCM"
        assert error.reason == "different manager"
        assert "already registered: different manager" in error.message


class TestGenerationForbiddenError:
    def test_message(self) -> None:
        error = GenerationForbiddenError("HMAC-SHA1-160", "registered for existing keys only")

        assert "forbidden for 'HMAC-SHA1-160'" in error.message
        assert error.context == {"reason": "registered for existing keys only"}


class TestPrimitiveMismatchError:
    def test_message(self) -> None:
        error = PrimitiveMismatchError("HMAC-SHA256-256", "Aead", "Mac")

        assert error.message == "'HMAC-SHA256-256' produces Mac, not Aead"
        assert error.expected == "Aead"
        assert error.actual == "Mac"


# ==============================================================================
# KEY AND DECRYPTION ERRORS
# ==============================================================================


class TestInvalidKeyMaterialError:
    def test_sizes_in_context(self) -> None:
        error = InvalidKeyMaterialError(
            "bad key", algorithm="AES-128-GCM", expected_size=16, actual_size=5
        )

        assert error.expected_size == 16
        assert error.actual_size == 5
        assert error.context == {"expected_size": 16, "actual_size": 5}

    def test_sizes_omitted(self) -> None:
        assert InvalidKeyMaterialError("bad key").context == {}


class TestCiphertextTooShortError:
    def test_message(self) -> None:
        error = CiphertextTooShortError(16, 0, algorithm="AES-128-CTR-HMAC-SHA256")

        assert error.minimum_size == 16
        assert error.actual_size == 0
        assert "expected at least 16 bytes, got 0" in error.message
        assert isinstance(error, DecryptionError)


class TestSecurity:
    """Исключения не раскрывают секретные данные."""

    def test_key_bytes_not_in_message(self) -> None:
        secret = b"\x13\x37" * 8
        error = InvalidKeyMaterialError(
            "AES-128-GCM requires 16-byte key material, got 16",
            algorithm="AES-128-GCM",
            actual_size=len(secret),
        )

        assert secret.hex() not in str(error)
        assert repr(secret) not in str(error)
