"""
Слой криптографической гибкости (crypto agility).

Приложение запрашивает возможность (AEAD, MAC, гибридное шифрование,
подпись) по идентификатору алгоритма, а не по конкретной реализации.

Example:
    >>> from src.agility import Aead, Registry, register_all
    >>> register_all()
    >>> registry = Registry.get_instance()
    >>> key = registry.generate_new_key("AES-128-CTR-HMAC-SHA256")
    >>> aead = registry.primitive_for("AES-128-CTR-HMAC-SHA256", key, Aead)
    >>> aead.decrypt(aead.encrypt(b"hello", b"ctx"), b"ctx")
    b'hello'
"""

from src.agility.config import BootstrapProfile, register_all
from src.agility.core.exceptions import (
    AuthenticationFailedError,
    CiphertextTooShortError,
    CryptoError,
    DuplicateRegistrationError,
    GenerationForbiddenError,
    InvalidKeyMaterialError,
    PrimitiveMismatchError,
    UnknownAlgorithmError,
)
from src.agility.core.protocols import (
    Aead,
    HybridDecrypt,
    HybridEncrypt,
    IndCpaCipher,
    KeyManager,
    Mac,
    PrivateKeyManager,
    PublicKeySign,
    PublicKeyVerify,
)
from src.agility.core.registry import Registry, get_registry
from src.agility.subtle.encrypt_then_authenticate import EncryptThenAuthenticate

__all__ = [
    # Registry
    "Registry",
    "get_registry",
    "register_all",
    "BootstrapProfile",
    # Protocols
    "Aead",
    "Mac",
    "IndCpaCipher",
    "HybridEncrypt",
    "HybridDecrypt",
    "PublicKeySign",
    "PublicKeyVerify",
    "KeyManager",
    "PrivateKeyManager",
    # Composite
    "EncryptThenAuthenticate",
    # Errors
    "CryptoError",
    "UnknownAlgorithmError",
    "DuplicateRegistrationError",
    "GenerationForbiddenError",
    "PrimitiveMismatchError",
    "InvalidKeyMaterialError",
    "CiphertextTooShortError",
    "AuthenticationFailedError",
]

__version__ = "1.0.0"
