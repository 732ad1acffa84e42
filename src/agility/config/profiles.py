# -*- coding: utf-8 -*-
"""
RU: Профили загрузки реестра для разных типов приложений.
EN: Registry bootstrap profiles for different application needs.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Final, Optional, Tuple

from src.agility.config import aead_config, hybrid_config, mac_config, signature_config
from src.agility.core.registry import Registry

logger = logging.getLogger(__name__)

Bootstrapper = Callable[[Optional[Registry]], None]


class BootstrapProfile(str, Enum):
    """Predefined sets of capabilities to register at process start."""

    # MAC + AEAD only
    SYMMETRIC = "symmetric"

    # Hybrid encryption (pulls in AEAD and MAC)
    HYBRID = "hybrid"

    # Digital signatures only
    SIGNATURE = "signature"

    # Everything shipped in this release
    FULL = "full"


@dataclass(frozen=True)
class BootstrapConfig:
    """
    Bootstrap configuration.

    Attributes:
        bootstrappers: Registration routines, run in order.

    Examples:
        >>> cfg = BootstrapConfig.from_profile(BootstrapProfile.SYMMETRIC)
        >>> len(cfg.bootstrappers)
        1
    """

    bootstrappers: Tuple[Bootstrapper, ...]

    def __post_init__(self) -> None:
        """Validate parameters."""
        if not self.bootstrappers:
            raise ValueError("bootstrappers must not be empty")

    @staticmethod
    def from_profile(profile: BootstrapProfile) -> "BootstrapConfig":
        """
        Create configuration from predefined profile.

        Examples:
            >>> BootstrapConfig.from_profile(BootstrapProfile.FULL).bootstrappers[0]
            <function register_standard_algorithms at ...>
        """
        return _PROFILE_PARAMS[BootstrapProfile(profile)]

    def apply(self, registry: Optional[Registry] = None) -> None:
        """Run every bootstrapper against registry (or the process-wide one)."""
        for bootstrapper in self.bootstrappers:
            bootstrapper(registry)


_PROFILE_PARAMS: Final[dict[BootstrapProfile, BootstrapConfig]] = {
    BootstrapProfile.SYMMETRIC: BootstrapConfig(
        bootstrappers=(aead_config.register_standard_algorithms,),
    ),
    BootstrapProfile.HYBRID: BootstrapConfig(
        bootstrappers=(hybrid_config.register_standard_algorithms,),
    ),
    BootstrapProfile.SIGNATURE: BootstrapConfig(
        bootstrappers=(signature_config.register_standard_algorithms,),
    ),
    BootstrapProfile.FULL: BootstrapConfig(
        bootstrappers=(
            mac_config.register_standard_algorithms,
            aead_config.register_standard_algorithms,
            hybrid_config.register_standard_algorithms,
            signature_config.register_standard_algorithms,
        ),
    ),
}


def register_all(
    profile: BootstrapProfile = BootstrapProfile.FULL,
    registry: Optional[Registry] = None,
) -> None:
    """
    Register every algorithm of the given profile.

    Examples:
        >>> register_all()
        >>> Registry.get_instance().is_registered("AES-128-GCM")
        True
    """
    BootstrapConfig.from_profile(profile).apply(registry)
    logger.info(f"Bootstrap profile '{BootstrapProfile(profile).value}' applied")


__all__ = [
    "BootstrapProfile",
    "BootstrapConfig",
    "register_all",
]
