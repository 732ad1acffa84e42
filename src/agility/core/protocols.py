"""
Протокольные интерфейсы слоя криптографической гибкости.

Определяет контракты возможностей (capabilities), которые приложение
запрашивает по имени, не завязываясь на конкретный алгоритм:
- Aead: аутентифицированное шифрование с ассоциированными данными
- Mac: код аутентификации сообщения
- IndCpaCipher: шифр без аутентификации (только IND-CPA)
- HybridEncrypt / HybridDecrypt: гибридное шифрование
- PublicKeySign / PublicKeyVerify: цифровая подпись
- KeyManager / PrivateKeyManager: фабрика примитивов из ключевого материала

Модуль использует typing.Protocol для определения контрактов, что обеспечивает
structural subtyping без явного наследования. Все Protocol классы помечены
@runtime_checkable для поддержки isinstance() проверок.

Example:
    >>> aead = registry.primitive_for("AES-128-GCM", key)
    >>> isinstance(aead, Aead)
    True
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

# ==============================================================================
# PRIMITIVE PROTOCOLS
# ==============================================================================


@runtime_checkable
class Aead(Protocol):
    """
    Протокол AEAD (Authenticated Encryption with Associated Data).

    Обеспечивает конфиденциальность plaintext и целостность как
    plaintext, так и associated_data. Associated data НЕ шифруется.

    Example:
        >>> ciphertext = aead.encrypt(b"hello", b"ctx")
        >>> aead.decrypt(ciphertext, b"ctx")
        b'hello'
    """

    def encrypt(self, plaintext: bytes, associated_data: bytes) -> bytes:
        """
        Зашифровать plaintext, аутентифицировав associated_data.

        Raises:
            TypeError: Аргументы не bytes
            EncryptionFailedError: Внутренняя ошибка алгоритма
        """
        ...

    def decrypt(self, ciphertext: bytes, associated_data: bytes) -> bytes:
        """
        Проверить и расшифровать ciphertext.

        Raises:
            CiphertextTooShortError: Шифротекст короче фиксированной части
            AuthenticationFailedError: Данные изменены или неверный ключ
        """
        ...


@runtime_checkable
class Mac(Protocol):
    """
    Протокол MAC (Message Authentication Code).

    Security:
        verify() ОБЯЗАН сравнивать теги за постоянное время.
    """

    def compute(self, data: bytes) -> bytes:
        """Вычислить тег фиксированной длины для data."""
        ...

    def verify(self, tag: bytes, data: bytes) -> bool:
        """Проверить тег. Возвращает False при несовпадении (не бросает)."""
        ...


@runtime_checkable
class IndCpaCipher(Protocol):
    """
    Протокол шифра без аутентификации (IND-CPA).

    ⚠️  НЕ обеспечивает целостность! Используется только как составная
    часть Encrypt-then-Authenticate. Шифр сам генерирует и встраивает IV.
    """

    def encrypt(self, plaintext: bytes) -> bytes:
        """Зашифровать plaintext (IV включён в результат)."""
        ...

    def decrypt(self, ciphertext: bytes) -> bytes:
        """Расшифровать; бросает ошибку на некорректном формате."""
        ...


@runtime_checkable
class HybridEncrypt(Protocol):
    """Протокол гибридного шифрования на публичном ключе получателя."""

    def encrypt(self, plaintext: bytes, context_info: bytes) -> bytes:
        """
        Зашифровать plaintext для владельца приватного ключа.

        Args:
            plaintext: Данные для шифрования
            context_info: Контекст, привязываемый к шифротексту
                (должен совпадать при расшифровке)
        """
        ...


@runtime_checkable
class HybridDecrypt(Protocol):
    """Протокол гибридной расшифровки на приватном ключе получателя."""

    def decrypt(self, ciphertext: bytes, context_info: bytes) -> bytes:
        """Расшифровать ciphertext, созданный HybridEncrypt."""
        ...


@runtime_checkable
class PublicKeySign(Protocol):
    """Протокол создания цифровой подписи."""

    def sign(self, data: bytes) -> bytes:
        """Подписать data приватным ключом."""
        ...


@runtime_checkable
class PublicKeyVerify(Protocol):
    """Протокол проверки цифровой подписи."""

    def verify(self, signature: bytes, data: bytes) -> bool:
        """Проверить подпись. Возвращает False при невалидной подписи."""
        ...


# ==============================================================================
# KEY MANAGER PROTOCOLS
# ==============================================================================


@runtime_checkable
class KeyManager(Protocol):
    """
    Протокол менеджера ключей (один экземпляр на алгоритм).

    Менеджер владеет идентификатором алгоритма и умеет:
    - validate(): проверить сериализованный ключевой материал
    - primitive_from(): построить примитив из валидного ключа
    - generate(): создать новый ключевой материал (если поддерживается)

    Attributes:
        key_type: Глобально уникальный идентификатор алгоритма
        primitive: Протокол производимого примитива (Aead, Mac, ...)
        supports_generation: Может ли менеджер генерировать ключи

    Example:
        >>> manager = AesGcm128KeyManager()
        >>> manager.key_type
        'AES-128-GCM'
        >>> key = manager.generate()
        >>> aead = manager.primitive_from(key)
    """

    key_type: str
    primitive: type
    supports_generation: bool

    def validate(self, key_material: bytes) -> None:
        """
        Проверить ключевой материал.

        Raises:
            InvalidKeyMaterialError: Ключ некорректен
        """
        ...

    def primitive_from(self, key_material: bytes) -> Any:
        """Построить примитив, привязанный к ключу."""
        ...

    def generate(self) -> bytes:
        """
        Сгенерировать новый ключевой материал.

        Raises:
            KeyGenerationError: Генерация не поддерживается
        """
        ...


@runtime_checkable
class PrivateKeyManager(KeyManager, Protocol):
    """Менеджер приватных ключей: умеет выводить публичный ключ."""

    public_key_type: str

    def public_key(self, private_key: bytes) -> bytes:
        """Вывести публичный ключевой материал для парного менеджера."""
        ...


__all__: list[str] = [
    "Aead",
    "Mac",
    "IndCpaCipher",
    "HybridEncrypt",
    "HybridDecrypt",
    "PublicKeySign",
    "PublicKeyVerify",
    "KeyManager",
    "PrivateKeyManager",
]
