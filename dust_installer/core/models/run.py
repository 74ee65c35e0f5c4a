"""
RunContext — the record threaded through every installer stage.

Each stage reads what earlier stages produced and returns a new
context with its own fields filled in.  Fields are single-assignment:
once a value is set it can never be replaced for the rest of the run.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from dust_installer.core.models.platform import ArchKey, PlatformKey, Target
from dust_installer.core.models.release import ArchiveSpec, InstallTarget


class Stage(str, Enum):
    """Installer state machine.  Stages run in declaration order."""

    INIT = "init"
    DETECT_PLATFORM = "detect_platform"
    DETECT_ARCH = "detect_arch"
    RESOLVE_VERSION = "resolve_version"
    DERIVE_TARGET = "derive_target"
    RETRIEVE = "retrieve"
    INSTALL = "install"
    DONE = "done"
    FAILED = "failed"


PIPELINE: tuple[Stage, ...] = (
    Stage.DETECT_PLATFORM,
    Stage.DETECT_ARCH,
    Stage.RESOLVE_VERSION,
    Stage.DERIVE_TARGET,
    Stage.RETRIEVE,
    Stage.INSTALL,
)


# Updated through advance() / warn() or by assign() itself.
_ACCUMULATING = frozenset({"stage", "warnings", "assigned"})


@dataclass(frozen=True)
class RunContext:
    """Immutable accumulation of everything derived during one run."""

    stage: Stage = Stage.INIT
    platform: PlatformKey | None = None
    arch: ArchKey | None = None
    version: str | None = None
    version_pinned: bool = False
    target: Target | None = None
    archive: ArchiveSpec | None = None
    url: str | None = None
    binary_path: Path | None = None
    install_target: InstallTarget | None = None
    installed_path: Path | None = None
    elevated: bool = False
    path_hint: str | None = None
    version_output: str | None = None
    warnings: tuple[str, ...] = field(default_factory=tuple)
    assigned: frozenset[str] = field(default=frozenset(), repr=False)

    def assign(self, **values: object) -> RunContext:
        """Return a copy with ``values`` set.

        Raises:
            ValueError: If any field in ``values`` was already assigned
                by an earlier call, whatever value it was given.
        """
        for name in values:
            if name in _ACCUMULATING or name not in _SINGLE_ASSIGNMENT:
                raise ValueError(f"RunContext.{name} is not single-assignment")
            if name in self.assigned:
                raise ValueError(f"RunContext.{name} is already assigned")
        return dataclasses.replace(
            self, assigned=self.assigned | frozenset(values), **values,
        )

    def advance(self, stage: Stage) -> RunContext:
        return dataclasses.replace(self, stage=stage)

    def warn(self, message: str) -> RunContext:
        return dataclasses.replace(self, warnings=self.warnings + (message,))


_SINGLE_ASSIGNMENT = frozenset(
    f.name for f in dataclasses.fields(RunContext)
) - _ACCUMULATING
