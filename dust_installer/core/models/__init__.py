"""
Domain models — Pydantic types and the run record for the installer.

All models are re-exported here for convenient access:

    from dust_installer.core.models import InstallerConfig, RunContext, Target
"""

from dust_installer.core.models.config import InstallerConfig
from dust_installer.core.models.fetch import FetchReceipt
from dust_installer.core.models.platform import ArchKey, PlatformKey, Target
from dust_installer.core.models.release import ArchiveSpec, InstallTarget
from dust_installer.core.models.run import PIPELINE, RunContext, Stage

__all__ = [
    "PIPELINE",
    "ArchKey",
    "ArchiveSpec",
    "FetchReceipt",
    "InstallerConfig",
    "InstallTarget",
    "PlatformKey",
    "RunContext",
    "Stage",
    "Target",
]
