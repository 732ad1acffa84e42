"""
Пакет crypto-agility
====================

Слой криптографической гибкости: приложение получает именованную
возможность (AEAD, MAC, гибридное шифрование, цифровая подпись) по
идентификатору алгоритма, не завязываясь на конкретную реализацию.

Этот пакет предоставляет:
    - Реестр менеджеров ключей с контролем конфликтов и понижения
    - Загрузчики стандартных алгоритмов текущего релиза
    - Композитный AEAD Encrypt-then-Authenticate (IND-CPA шифр + MAC)
    - Примитивы на базе библиотеки cryptography

Пример базового использования:
    >>> from src.agility import Aead, Registry, register_all
    >>>
    >>> register_all()
    >>> registry = Registry.get_instance()
    >>> key = registry.generate_new_key("AES-256-CTR-HMAC-SHA256")
    >>> aead = registry.primitive_for("AES-256-CTR-HMAC-SHA256", key, Aead)
    >>> ciphertext = aead.encrypt(b"hello", b"ctx")

Управление логированием:
    >>> import os
    >>> os.environ['AGILITY_LOG_LEVEL'] = 'DEBUG'
    >>> os.environ['AGILITY_LOG_FILE'] = 'logs/agility.log'

Версия: 1.0.0
Лицензия: MIT
Python: 3.11+
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "1.0.0"
__description__ = "Crypto agility layer: key-manager registry and composite AEAD"
__license__ = "MIT"
__python_requires__ = ">=3.11"

# =============================================================================
# ПРОВЕРКА ВЕРСИИ PYTHON
# =============================================================================

if sys.version_info < (3, 11):
    raise RuntimeError(
        f"crypto-agility требует Python 3.11 или выше. "
        f"Текущая версия: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================

PACKAGE_LOGGER_NAME = "src.agility"


def _setup_logging() -> None:
    """
    Инициализировать логирование пакета.

    Настраивает логгер пакета с:
    - Консольным обработчиком (stderr) для WARNING и выше
    - Ротирующим файловым обработчиком, если задан AGILITY_LOG_FILE

    Уровень логирования задаётся переменной окружения AGILITY_LOG_LEVEL.
    Допустимые значения: DEBUG, INFO, WARNING, ERROR, CRITICAL

    Функция идемпотентна - повторные вызовы не имеют эффекта.
    """
    log_level_str = os.environ.get("AGILITY_LOG_LEVEL", "INFO").upper()

    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if package_logger.handlers:
        return

    package_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt=("[%(asctime)s] %(levelname)-8s " "[%(name)s.%(funcName)s:%(lineno)d] %(message)s"),
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Консольный обработчик (stderr) - WARNING и выше
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    log_file = os.environ.get("AGILITY_LOG_FILE")
    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_path,
                maxBytes=10 * 1024 * 1024,  # 10 МБ
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
        except OSError as e:
            package_logger.warning(
                f"Не удалось инициализировать файловое логирование: {e}. "
                f"Используется только консоль."
            )


_setup_logging()

__all__ = ["__version__", "PACKAGE_LOGGER_NAME"]
