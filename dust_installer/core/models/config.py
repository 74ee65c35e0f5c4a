"""
InstallerConfig — everything the installer can be told from outside.

Loaded by ``dust_installer.core.config.loader`` from (lowest to highest
precedence) defaults, an optional YAML file, environment variables, and
CLI options.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

HttpClientName = Literal["auto", "urllib", "curl", "wget"]


class InstallerConfig(BaseModel):
    """Installer settings."""

    repo: str = "bootandy/dust"
    binary_name: str = "dust"
    api_base: str = "https://api.github.com"
    download_base: str = "https://github.com"

    version: str | None = None          # DUST_VERSION: pinned release
    install_dir: str | None = None      # DUST_INSTALL: forced destination

    system_bin_dir: str = "/usr/local/bin"
    user_bin_dir: str = "~/.local/bin"

    http_client: HttpClientName = "auto"
    timeout: float | None = Field(default=None, gt=0)
    allow_elevation: bool = True
    temp_root: str | None = None

    @field_validator("repo")
    @classmethod
    def _repo_has_owner(cls, value: str) -> str:
        owner, sep, name = value.partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(f"repo must be 'owner/name', got {value!r}")
        return value

    @field_validator("api_base", "download_base")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("version", "install_dir", "temp_root")
    @classmethod
    def _empty_is_unset(cls, value: str | None) -> str | None:
        # Shell-style: an exported but empty variable counts as unset.
        if value is not None and not value.strip():
            return None
        return value
