"""
Unit-тесты для реестра менеджеров ключей.

Проверяет:
- Singleton паттерн (get_instance / reset_instance)
- Правила повторной регистрации и конфликтов
- Контроль понижения (new_key_allowed)
- Построение примитивов и проверку типа примитива
- Thread-safety (concurrent регистрация и чтение)
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Generator, List

import pytest

from src.agility.algorithms.mac import (
    HmacSha1KeyManager,
    HmacSha256Tag128KeyManager,
    HmacSha256Tag256KeyManager,
)
from src.agility.algorithms.signature import (
    Ed25519PrivateKeyManager,
    Ed25519PublicKeyManager,
)
from src.agility.core.exceptions import (
    DuplicateRegistrationError,
    GenerationForbiddenError,
    InvalidKeyMaterialError,
    PrimitiveMismatchError,
    UnknownAlgorithmError,
)
from src.agility.core.key_manager import RawKeyManager
from src.agility.core.protocols import Aead, Mac
from src.agility.core.registry import Registry, RegistryEntry, get_registry


# ==============================================================================
# MOCK KEY MANAGERS
# ==============================================================================


class OtherHmacSha256KeyManager(RawKeyManager):
    """Другой класс, претендующий на идентификатор HMAC-SHA256-256."""

    key_type = "HMAC-SHA256-256"
    primitive = Mac
    KEY_SIZE = 32

    def _build(self, key_material: bytes) -> object:
        return object()


class NotAKeyManager:
    """Не реализует протокол KeyManager."""

    key_type = "BROKEN"


# ==============================================================================
# FIXTURES
# ==============================================================================


@pytest.fixture(autouse=True)
def reset_registry() -> Generator[None, None, None]:
    """Автоматически сбрасывать singleton перед каждым тестом."""
    Registry.reset_instance()
    yield
    Registry.reset_instance()


@pytest.fixture
def registry() -> Registry:
    """Свежий изолированный реестр."""
    return Registry()


# ==============================================================================
# TEST: Singleton Pattern
# ==============================================================================


class TestSingletonPattern:
    """Тесты общего реестра процесса."""

    def test_get_instance_returns_same_instance(self) -> None:
        assert Registry.get_instance() is Registry.get_instance()

    def test_get_registry_shortcut(self) -> None:
        assert get_registry() is Registry.get_instance()

    def test_reset_instance_clears_registry(self) -> None:
        first = Registry.get_instance()
        first.register_key_manager(HmacSha256Tag256KeyManager())

        Registry.reset_instance()
        second = Registry.get_instance()

        assert second is not first
        assert len(second) == 0

    def test_explicit_instances_are_independent(self, registry: Registry) -> None:
        registry.register_key_manager(HmacSha256Tag256KeyManager())

        assert not Registry.get_instance().is_registered("HMAC-SHA256-256")


# ==============================================================================
# TEST: Registration
# ==============================================================================


class TestRegistration:
    """Тесты регистрации и правил конфликтов."""

    def test_register_new_key_type(self, registry: Registry) -> None:
        registry.register("HMAC-SHA256-256", HmacSha256Tag256KeyManager())

        assert registry.is_registered("HMAC-SHA256-256")
        assert registry.new_key_allowed("HMAC-SHA256-256") is True
        assert len(registry) == 1

    def test_reregister_same_class_is_noop(self, registry: Registry) -> None:
        first = HmacSha256Tag256KeyManager()
        registry.register_key_manager(first)
        registry.register_key_manager(HmacSha256Tag256KeyManager())

        assert registry.get_key_manager("HMAC-SHA256-256") is first
        assert len(registry) == 1

    def test_different_class_rejected(self, registry: Registry) -> None:
        registry.register_key_manager(HmacSha256Tag256KeyManager())

        with pytest.raises(DuplicateRegistrationError) as exc_info:
            registry.register_key_manager(OtherHmacSha256KeyManager())

        assert "HmacSha256Tag256KeyManager" in exc_info.value.reason
        assert isinstance(
            registry.get_key_manager("HMAC-SHA256-256"), HmacSha256Tag256KeyManager
        )

    def test_tightening_new_key_allowed_is_noop(self, registry: Registry) -> None:
        """Повторная регистрация с False не меняет существующий флаг True."""
        registry.register_key_manager(HmacSha256Tag256KeyManager())
        registry.register_key_manager(HmacSha256Tag256KeyManager(), new_key_allowed=False)

        assert registry.new_key_allowed("HMAC-SHA256-256") is True

    def test_loosening_new_key_allowed_rejected(self, registry: Registry) -> None:
        """Нельзя снова разрешить генерацию для устаревшего алгоритма."""
        registry.register_key_manager(HmacSha1KeyManager(), new_key_allowed=False)

        with pytest.raises(DuplicateRegistrationError, match="cannot be re-enabled"):
            registry.register_key_manager(HmacSha1KeyManager(), new_key_allowed=True)

        assert registry.new_key_allowed("HMAC-SHA1-160") is False

    def test_same_flag_false_is_noop(self, registry: Registry) -> None:
        registry.register_key_manager(HmacSha1KeyManager(), new_key_allowed=False)
        registry.register_key_manager(HmacSha1KeyManager(), new_key_allowed=False)

        assert registry.new_key_allowed("HMAC-SHA1-160") is False

    @pytest.mark.parametrize("key_type", ["", "   "])
    def test_empty_key_type_rejected(self, registry: Registry, key_type: str) -> None:
        with pytest.raises(ValueError):
            registry.register(key_type, HmacSha256Tag256KeyManager())

    def test_key_type_must_match_manager(self, registry: Registry) -> None:
        with pytest.raises(ValueError, match="HMAC-SHA256-256"):
            registry.register("HMAC-SHA256-128", HmacSha256Tag256KeyManager())

    def test_non_key_manager_rejected(self, registry: Registry) -> None:
        with pytest.raises(TypeError):
            registry.register("BROKEN", NotAKeyManager())  # type: ignore[arg-type]

    def test_list_key_types_sorted(self, registry: Registry) -> None:
        registry.register_key_manager(HmacSha256Tag256KeyManager())
        registry.register_key_manager(HmacSha1KeyManager(), new_key_allowed=False)
        registry.register_key_manager(HmacSha256Tag128KeyManager())

        assert registry.list_key_types() == [
            "HMAC-SHA1-160",
            "HMAC-SHA256-128",
            "HMAC-SHA256-256",
        ]

    def test_registry_entry_is_frozen(self) -> None:
        entry = RegistryEntry("HMAC-SHA1-160", HmacSha1KeyManager(), False)

        with pytest.raises(AttributeError):
            entry.new_key_allowed = True  # type: ignore[misc]


# ==============================================================================
# TEST: Lookup and primitives
# ==============================================================================


class TestLookup:
    """Тесты поиска менеджеров и построения примитивов."""

    def test_unknown_key_type(self, registry: Registry) -> None:
        registry.register_key_manager(HmacSha256Tag256KeyManager())

        with pytest.raises(UnknownAlgorithmError) as exc_info:
            registry.get_key_manager("NOPE")

        assert exc_info.value.available == ["HMAC-SHA256-256"]

    @pytest.mark.parametrize(
        "call",
        [
            lambda r: r.primitive_for("NOPE", b"k"),
            lambda r: r.generate_new_key("NOPE"),
            lambda r: r.new_key_allowed("NOPE"),
            lambda r: r.get_public_key("NOPE", b"k"),
        ],
    )
    def test_unknown_key_type_everywhere(self, registry: Registry, call) -> None:
        with pytest.raises(UnknownAlgorithmError):
            call(registry)

    def test_is_registered_false_for_unknown(self, registry: Registry) -> None:
        assert registry.is_registered("NOPE") is False

    def test_primitive_for_builds_mac(self, registry: Registry) -> None:
        registry.register_key_manager(HmacSha256Tag256KeyManager())
        key = registry.generate_new_key("HMAC-SHA256-256")

        mac = registry.primitive_for("HMAC-SHA256-256", key, Mac)

        assert isinstance(mac, Mac)
        assert len(mac.compute(b"data")) == 32

    def test_primitive_for_without_expected_type(self, registry: Registry) -> None:
        registry.register_key_manager(HmacSha256Tag256KeyManager())

        mac = registry.primitive_for("HMAC-SHA256-256", os.urandom(32))

        assert mac.verify(mac.compute(b"x"), b"x")

    def test_primitive_mismatch(self, registry: Registry) -> None:
        registry.register_key_manager(HmacSha256Tag256KeyManager())

        with pytest.raises(PrimitiveMismatchError) as exc_info:
            registry.primitive_for("HMAC-SHA256-256", os.urandom(32), Aead)

        assert exc_info.value.expected == "Aead"
        assert exc_info.value.actual == "Mac"

    def test_invalid_key_material(self, registry: Registry) -> None:
        registry.register_key_manager(HmacSha256Tag256KeyManager())

        with pytest.raises(InvalidKeyMaterialError) as exc_info:
            registry.primitive_for("HMAC-SHA256-256", b"short", Mac)

        assert exc_info.value.expected_size == 32
        assert exc_info.value.actual_size == 5


# ==============================================================================
# TEST: Downgrade control
# ==============================================================================


class TestKeyGeneration:
    """Тесты контроля генерации новых ключей."""

    def test_generate_new_key(self, registry: Registry) -> None:
        registry.register_key_manager(HmacSha256Tag256KeyManager())

        first = registry.generate_new_key("HMAC-SHA256-256")
        second = registry.generate_new_key("HMAC-SHA256-256")

        assert len(first) == 32
        assert first != second

    def test_generation_forbidden_for_deprecated(self, registry: Registry) -> None:
        registry.register_key_manager(HmacSha1KeyManager(), new_key_allowed=False)

        with pytest.raises(GenerationForbiddenError) as exc_info:
            registry.generate_new_key("HMAC-SHA1-160")

        assert exc_info.value.reason == "registered for existing keys only"

    def test_deprecated_existing_keys_still_work(self, registry: Registry) -> None:
        registry.register_key_manager(HmacSha1KeyManager(), new_key_allowed=False)
        key = os.urandom(20)

        mac = registry.primitive_for("HMAC-SHA1-160", key, Mac)

        assert mac.verify(mac.compute(b"legacy"), b"legacy")

    def test_generation_unsupported_by_manager(self, registry: Registry) -> None:
        registry.register_key_manager(Ed25519PublicKeyManager())

        with pytest.raises(GenerationForbiddenError, match="ED25519-PUBLIC"):
            registry.generate_new_key("ED25519-PUBLIC")


class TestPublicKey:
    """Тесты вывода публичного ключа."""

    def test_get_public_key(self, registry: Registry) -> None:
        registry.register_key_manager(Ed25519PrivateKeyManager())
        private_key = registry.generate_new_key("ED25519-PRIVATE")

        public_key = registry.get_public_key("ED25519-PRIVATE", private_key)

        assert len(public_key) == 32
        assert public_key == registry.get_public_key("ED25519-PRIVATE", private_key)

    def test_get_public_key_requires_private_manager(self, registry: Registry) -> None:
        registry.register_key_manager(HmacSha256Tag256KeyManager())

        with pytest.raises(PrimitiveMismatchError):
            registry.get_public_key("HMAC-SHA256-256", os.urandom(32))


# ==============================================================================
# TEST: Thread Safety
# ==============================================================================


class TestThreadSafety:
    """Тесты concurrent доступа."""

    def test_concurrent_same_registration(self, registry: Registry) -> None:
        """Одновременная регистрация одного менеджера оставляет одну запись."""

        def register() -> None:
            registry.register_key_manager(HmacSha256Tag256KeyManager())

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [executor.submit(register) for _ in range(64)]
            for future in as_completed(futures):
                future.result()

        assert len(registry) == 1

    def test_concurrent_conflicting_registration(self, registry: Registry) -> None:
        """Из конфликтующих регистраций побеждает ровно одна."""
        managers: List[RawKeyManager] = [
            HmacSha256Tag256KeyManager() if i % 2 else OtherHmacSha256KeyManager()
            for i in range(32)
        ]

        def register(manager: RawKeyManager) -> bool:
            try:
                registry.register_key_manager(manager)
            except DuplicateRegistrationError:
                return False
            return True

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(register, managers))

        winner = type(registry.get_key_manager("HMAC-SHA256-256"))
        assert results.count(True) == sum(type(m) is winner for m in managers)

    def test_concurrent_readers_and_writers(self, registry: Registry) -> None:
        registry.register_key_manager(HmacSha256Tag256KeyManager())
        key = os.urandom(32)

        def read() -> bool:
            mac = registry.primitive_for("HMAC-SHA256-256", key, Mac)
            return mac.verify(mac.compute(b"x"), b"x")

        def write() -> bool:
            registry.register_key_manager(HmacSha1KeyManager(), new_key_allowed=False)
            return True

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [executor.submit(read if i % 4 else write) for i in range(64)]
            assert all(f.result() for f in as_completed(futures))
