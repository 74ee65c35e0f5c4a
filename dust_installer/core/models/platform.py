"""
Platform models — host OS / CPU keys and the derived release target.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class PlatformKey(str, Enum):
    """Operating system family a release artifact is built for."""

    LINUX = "linux"
    DARWIN = "darwin"
    WINDOWS = "windows"


class ArchKey(str, Enum):
    """Normalized CPU architecture."""

    X86_64 = "x86_64"
    AARCH64 = "aarch64"
    ARM = "arm"
    I686 = "i686"


class Target(BaseModel):
    """Result of target derivation for one (platform, arch) pair.

    ``warning`` is set when the triple is a compatibility substitute
    rather than a native build (e.g. x86_64 on Apple Silicon).
    """

    model_config = ConfigDict(frozen=True)

    platform: PlatformKey
    arch: ArchKey
    triple: str
    warning: str | None = None

    @property
    def native(self) -> bool:
        return self.warning is None
