"""
L2 Resolver — (platform, arch) → release target.
"""

from __future__ import annotations

import logging

from dust_installer.core.errors import UnsupportedPlatform
from dust_installer.core.models.platform import ArchKey, PlatformKey, Target
from dust_installer.core.services.installer.data.targets import (
    PLATFORM_LABELS,
    TARGET_TRIPLES,
)

logger = logging.getLogger(__name__)


def is_supported(platform: PlatformKey, arch: ArchKey) -> bool:
    return (platform, arch) in TARGET_TRIPLES


def unsupported_pair(platform: PlatformKey, arch: ArchKey) -> UnsupportedPlatform:
    """The error for a (platform, arch) pair with no release target."""
    label = PLATFORM_LABELS.get(platform, platform.value)
    return UnsupportedPlatform(
        f"Unsupported {label} architecture: {arch.value} "
        f"(os={platform.value}, arch={arch.value})"
    )


def derive_target(platform: PlatformKey, arch: ArchKey) -> Target:
    """Look up the release target for a host.

    Raises:
        UnsupportedPlatform: The pair has no entry in ``TARGET_TRIPLES``.
    """
    entry = TARGET_TRIPLES.get((platform, arch))
    if entry is None:
        raise unsupported_pair(platform, arch)

    triple, warning = entry
    logger.debug("Target for %s/%s: %s", platform.value, arch.value, triple)
    return Target(platform=platform, arch=arch, triple=triple, warning=warning)


def supported_targets() -> list[Target]:
    """Every supported target, in table order."""
    return [derive_target(p, a) for (p, a) in TARGET_TRIPLES]
