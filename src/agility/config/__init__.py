"""
Загрузчики реестра: идемпотентные, версионированные процедуры регистрации
стандартных алгоритмов.

Зависимости загрузчиков:
    hybrid_config -> aead_config -> mac_config
    signature_config (независим)
"""

from src.agility.config import mac_config
from src.agility.config import aead_config
from src.agility.config import hybrid_config
from src.agility.config import signature_config
from src.agility.config.base import CONFIG_VERSION
from src.agility.config.profiles import BootstrapConfig, BootstrapProfile, register_all

__all__ = [
    "CONFIG_VERSION",
    "mac_config",
    "aead_config",
    "hybrid_config",
    "signature_config",
    "BootstrapConfig",
    "BootstrapProfile",
    "register_all",
]
