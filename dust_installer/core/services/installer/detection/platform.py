"""
L3 Detection — host operating system and CPU architecture.

Read-only probes of ``platform.system()`` / ``platform.machine()``,
mapped through the pattern tables in ``data.targets``.
"""

from __future__ import annotations

import fnmatch
import logging
import platform

from dust_installer.core.errors import UnsupportedPlatform
from dust_installer.core.models.platform import ArchKey, PlatformKey
from dust_installer.core.services.installer.data.targets import (
    ARCH_PATTERNS,
    PLATFORM_PATTERNS,
)

logger = logging.getLogger(__name__)


def host_kernel_name() -> str:
    """Raw kernel name, e.g. ``Linux``, ``Darwin``, ``MINGW64_NT-10.0``."""
    return platform.system()


def host_machine_name() -> str:
    """Raw machine hardware name, e.g. ``x86_64``, ``arm64``, ``AMD64``."""
    return platform.machine()


def detect_platform(kernel_name: str) -> PlatformKey:
    """Map a raw kernel name to a PlatformKey.

    Raises:
        UnsupportedPlatform: No pattern matches ``kernel_name``.
    """
    lowered = kernel_name.strip().lower()
    for patterns, key in PLATFORM_PATTERNS:
        if any(fnmatch.fnmatchcase(lowered, p) for p in patterns):
            logger.debug("Kernel %r → %s", kernel_name, key.value)
            return key
    raise UnsupportedPlatform(f"Unsupported operating system: {kernel_name}")


def detect_arch(machine_name: str) -> ArchKey:
    """Map a raw machine hardware name to an ArchKey.

    Raises:
        UnsupportedPlatform: No pattern matches ``machine_name``.
    """
    lowered = machine_name.strip().lower()
    for names, key in ARCH_PATTERNS:
        if lowered in names:
            logger.debug("Machine %r → %s", machine_name, key.value)
            return key
    raise UnsupportedPlatform(f"Unsupported architecture: {machine_name}")
