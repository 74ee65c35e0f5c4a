"""
Release models — archive naming and install destination.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class ArchiveSpec(BaseModel):
    """Release archive filename and the codec needed to unpack it."""

    model_config = ConfigDict(frozen=True)

    name: str
    extension: Literal["tar.gz", "zip"]


class InstallTarget(BaseModel):
    """Directory the executable will be copied into.

    ``source`` records which probe selected it: the explicit override,
    the system-wide bin dir, or the per-user bin dir.
    """

    model_config = ConfigDict(frozen=True)

    directory: str
    writable: bool
    needs_elevation: bool = False
    source: Literal["override", "system", "user"] = "user"
