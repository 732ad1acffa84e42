"""
Централизованные исключения слоя криптографической гибкости.

Иерархия типизированных исключений для реестра, менеджеров ключей
и композитных примитивов. Обеспечивает единообразную обработку ошибок
и безопасность (NO раскрытия секретных данных).

Example:
    >>> from src.agility.core.exceptions import CryptoError
    >>> try:
    ...     aead.decrypt(ciphertext, associated_data)
    ... except CryptoError as e:
    ...     logger.error(f"Crypto failed: {e}")

Иерархия:
    CryptoError (базовое)
    ├── RegistryError
    │   ├── UnknownAlgorithmError
    │   ├── DuplicateRegistrationError
    │   ├── GenerationForbiddenError
    │   └── PrimitiveMismatchError
    ├── CryptoKeyError
    │   ├── InvalidKeyMaterialError
    │   └── KeyGenerationError
    ├── EncryptionError
    │   ├── EncryptionFailedError
    │   └── DecryptionError
    │       ├── CiphertextTooShortError
    │       └── AuthenticationFailedError
    └── SignatureError
        └── SigningFailedError

Security Note:
    Все исключения НЕ раскрывают:
    - Ключи или их части
    - Plaintext или ciphertext
    - Nonce/IV значения
    - Значения MAC тегов
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

__all__: list[str] = [
    # Base exception
    "CryptoError",
    # Registry errors
    "RegistryError",
    "UnknownAlgorithmError",
    "DuplicateRegistrationError",
    "GenerationForbiddenError",
    "PrimitiveMismatchError",
    # Key errors
    "CryptoKeyError",
    "InvalidKeyMaterialError",
    "KeyGenerationError",
    # Encryption errors
    "EncryptionError",
    "EncryptionFailedError",
    "DecryptionError",
    "CiphertextTooShortError",
    "AuthenticationFailedError",
    # Signature errors
    "SignatureError",
    "SigningFailedError",
]


# ==============================================================================
# BASE EXCEPTION
# ==============================================================================


class CryptoError(Exception):
    """
    Базовое исключение для всех криптографических ошибок.

    Attributes:
        message: Человекочитаемое сообщение об ошибке
        algorithm: Идентификатор алгоритма (опционально)
        context: Дополнительный контекст для отладки (без секретов!)

    Example:
        >>> raise CryptoError(
        ...     "Operation failed",
        ...     algorithm="AES-128-GCM",
        ...     context={"operation": "decrypt"},
        ... )
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.algorithm = algorithm
        self.context = context or {}

    def __str__(self) -> str:
        """
        Строковое представление исключения.

        Example:
            >>> str(error)
            'CryptoError: Operation failed [algorithm=AES-128-GCM]'
        """
        parts = [self.__class__.__name__, ": ", self.message]

        if self.algorithm:
            parts.append(f" [algorithm={self.algorithm}]")

        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f" ({ctx_str})")

        return "".join(parts)

    def __repr__(self) -> str:
        """Представление для отладки."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"algorithm={self.algorithm!r}, "
            f"context={self.context!r})"
        )


# ==============================================================================
# REGISTRY ERRORS
# ==============================================================================


class RegistryError(CryptoError):
    """Ошибки реестра алгоритмов."""

    pass


class UnknownAlgorithmError(RegistryError):
    """
    Идентификатор алгоритма не зарегистрирован в реестре.

    Attributes:
        algorithm_name: Запрошенный идентификатор
        available: Список зарегистрированных идентификаторов

    Example:
        >>> registry.primitive_for("NonExistent", key)
        UnknownAlgorithmError: Algorithm 'NonExistent' is not registered
    """

    def __init__(
        self,
        algorithm_name: str,
        available: Optional[List[str]] = None,
    ) -> None:
        message = f"Algorithm '{algorithm_name}' is not registered"

        if available:
            message += f". Available: {', '.join(available[:5])}"
            if len(available) > 5:
                message += f" ... ({len(available)} total)"

        super().__init__(
            message,
            algorithm=algorithm_name,
            context={"available_count": len(available) if available else 0},
        )
        self.algorithm_name = algorithm_name
        self.available = available or []


class DuplicateRegistrationError(RegistryError):
    """
    Конфликтующая повторная регистрация идентификатора.

    Raises когда:
    - Идентификатор уже занят менеджером другого класса
    - Попытка снять запрет на генерацию новых ключей

    Attributes:
        algorithm_name: Конфликтующий идентификатор
        reason: Причина конфликта

    Example:
        >>> registry.register("HMAC-SHA256-256", OtherManager())
        DuplicateRegistrationError: Algorithm 'HMAC-SHA256-256' is already registered
    """

    def __init__(self, algorithm_name: str, reason: str) -> None:
        message = f"Algorithm '{algorithm_name}' is already registered: {reason}"
        super().__init__(
            message,
            algorithm=algorithm_name,
            context={"reason": reason},
        )
        self.algorithm_name = algorithm_name
        self.reason = reason


class GenerationForbiddenError(RegistryError):
    """
    Генерация новых ключей запрещена для алгоритма.

    Используется для вывода слабых алгоритмов из оборота: существующие
    ключи продолжают работать (только расшифровка/проверка), новые
    ключи не создаются.

    Example:
        >>> registry.generate_new_key("HMAC-SHA1-160")
        GenerationForbiddenError: New key generation is forbidden for 'HMAC-SHA1-160'
    """

    def __init__(self, algorithm_name: str, reason: str) -> None:
        message = f"New key generation is forbidden for '{algorithm_name}'"
        super().__init__(
            message,
            algorithm=algorithm_name,
            context={"reason": reason},
        )
        self.algorithm_name = algorithm_name
        self.reason = reason


class PrimitiveMismatchError(RegistryError):
    """
    Менеджер ключей производит примитив не того типа, что запрошен.

    Example:
        >>> registry.primitive_for("HMAC-SHA256-256", key, Aead)
        PrimitiveMismatchError: 'HMAC-SHA256-256' produces Mac, not Aead
    """

    def __init__(self, algorithm_name: str, expected: str, actual: str) -> None:
        message = f"'{algorithm_name}' produces {actual}, not {expected}"
        super().__init__(
            message,
            algorithm=algorithm_name,
            context={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


# ==============================================================================
# KEY ERRORS
# ==============================================================================


class CryptoKeyError(CryptoError):
    """
    Базовая ошибка для операций с ключами.

    Note:
        Названа CryptoKeyError чтобы не конфликтовать с builtin KeyError.
    """

    pass


class InvalidKeyMaterialError(CryptoKeyError):
    """
    Менеджер ключей отклонил переданный ключевой материал.

    Raises когда:
    - Ключ имеет неверную длину
    - Ключ не является корректной точкой/скаляром кривой
    - Ключ имеет неверный тип

    Attributes:
        expected_size: Ожидаемый размер ключа в байтах
        actual_size: Фактический размер ключа в байтах

    Example:
        >>> manager.validate(b"short")
        InvalidKeyMaterialError: AES-128-GCM requires 16-byte key material, got 5
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: Optional[str] = None,
        expected_size: Optional[int] = None,
        actual_size: Optional[int] = None,
    ) -> None:
        context: Dict[str, Any] = {}
        if expected_size is not None:
            context["expected_size"] = expected_size
        if actual_size is not None:
            context["actual_size"] = actual_size

        super().__init__(message, algorithm=algorithm, context=context)
        self.expected_size = expected_size
        self.actual_size = actual_size


class KeyGenerationError(CryptoKeyError):
    """Ошибка генерации ключа (или генерация не поддерживается менеджером)."""

    pass


# ==============================================================================
# ENCRYPTION ERRORS
# ==============================================================================


class EncryptionError(CryptoError):
    """Базовая ошибка операций шифрования."""

    pass


class EncryptionFailedError(EncryptionError):
    """Неудачное шифрование (внутренняя ошибка нижележащего алгоритма)."""

    pass


class DecryptionError(EncryptionError):
    """Базовый класс ошибок расшифровки."""

    pass


class CiphertextTooShortError(DecryptionError):
    """
    Шифротекст короче обязательной фиксированной части.

    Attributes:
        minimum_size: Минимально допустимая длина
        actual_size: Фактическая длина

    Example:
        >>> aead.decrypt(b"", b"ctx")
        CiphertextTooShortError: Ciphertext too short: expected at least 16 bytes, got 0
    """

    def __init__(
        self,
        minimum_size: int,
        actual_size: int,
        *,
        algorithm: Optional[str] = None,
    ) -> None:
        message = (
            f"Ciphertext too short: expected at least {minimum_size} bytes, "
            f"got {actual_size}"
        )
        super().__init__(
            message,
            algorithm=algorithm,
            context={"minimum_size": minimum_size, "actual_size": actual_size},
        )
        self.minimum_size = minimum_size
        self.actual_size = actual_size


class AuthenticationFailedError(DecryptionError):
    """
    Проверка аутентичности не прошла.

    Покрывает как подделку, так и случайное повреждение данных.

    Security Note:
        Причина неудачи НЕ уточняется (защита от oracle атак).
    """

    pass


# ==============================================================================
# SIGNATURE ERRORS
# ==============================================================================


class SignatureError(CryptoError):
    """Базовая ошибка операций с подписями."""

    pass


class SigningFailedError(SignatureError):
    """Неудачная генерация подписи."""

    pass


__version__ = "1.0.0"
