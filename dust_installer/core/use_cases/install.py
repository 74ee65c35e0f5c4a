"""
Install use case — configuration in, InstallResult out.

This is the top-level entry for every front end: it loads config, runs
the installer pipeline (which selects the HTTP client once, on first
network use), and turns any terminal error into a result the CLI can
render.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dust_installer.adapters.base import Fetcher
from dust_installer.adapters.registry import FetcherRegistry
from dust_installer.core.config.loader import ConfigError, load_config
from dust_installer.core.errors import InstallerError
from dust_installer.core.models.config import InstallerConfig
from dust_installer.core.models.run import RunContext, Stage
from dust_installer.core.services.installer.execution.subprocess_runner import (
    Runner,
    run_subprocess,
)
from dust_installer.core.services.installer.orchestration.orchestrator import (
    Installer,
    StageListener,
)

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Outcome of an install run."""

    ok: bool = False
    stage: str = Stage.INIT.value
    error: str | None = None
    error_kind: str | None = None

    binary_name: str = "dust"
    fetcher: str | None = None
    platform: str | None = None
    arch: str | None = None
    version: str | None = None
    version_pinned: bool = False
    target: str | None = None
    archive: str | None = None
    url: str | None = None
    install_dir: str | None = None
    installed_path: str | None = None
    elevated: bool = False
    path_hint: str | None = None
    version_output: str | None = None
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_context(cls, ctx: RunContext, **kwargs: Any) -> InstallResult:
        return cls(
            platform=ctx.platform.value if ctx.platform else None,
            arch=ctx.arch.value if ctx.arch else None,
            version=ctx.version,
            version_pinned=ctx.version_pinned,
            target=ctx.target.triple if ctx.target else None,
            archive=ctx.archive.name if ctx.archive else None,
            url=ctx.url,
            install_dir=ctx.install_target.directory if ctx.install_target else None,
            installed_path=str(ctx.installed_path) if ctx.installed_path else None,
            elevated=ctx.elevated,
            path_hint=ctx.path_hint,
            version_output=ctx.version_output,
            warnings=list(ctx.warnings),
            **kwargs,
        )

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        result: dict = {"ok": self.ok, "stage": self.stage}
        if self.error:
            result["error"] = self.error
            result["error_kind"] = self.error_kind

        for key in (
            "binary_name", "fetcher", "platform", "arch", "version", "target",
            "archive", "url", "install_dir", "installed_path", "path_hint",
            "version_output",
        ):
            value = getattr(self, key)
            if value is not None:
                result[key] = value

        result["version_pinned"] = self.version_pinned
        result["elevated"] = self.elevated
        result["warnings"] = list(self.warnings)
        return result


def run_install(
    config_path: Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
    config: InstallerConfig | None = None,
    environ: Mapping[str, str] | None = None,
    registry: FetcherRegistry | None = None,
    fetcher: Fetcher | None = None,
    kernel_name: str | None = None,
    machine_name: str | None = None,
    runner: Runner = run_subprocess,
    on_stage: StageListener | None = None,
) -> InstallResult:
    """Install the latest (or pinned) release.

    Args:
        config_path: Optional YAML config file.
        overrides: Highest-precedence config values (CLI options).
        config: Pre-built config; skips loading entirely.
        environ: Environment for config overrides, PATH and SHELL.
        registry: Fetcher registry (default: curl, wget, urllib).
        fetcher: Use this fetcher instead of selecting from the registry.
        kernel_name: Raw OS name override (default: read from the host).
        machine_name: Raw CPU name override (default: read from the host).
        runner: Subprocess runner for elevation and the version check.
        on_stage: Progress callback, called after each stage.

    Returns:
        InstallResult; ``error`` is set when the run failed.
    """
    # ── Load config ──────────────────────────────────────────────
    if config is None:
        try:
            config = load_config(config_path, environ=environ, overrides=overrides)
        except ConfigError as e:
            return InstallResult(error=str(e), error_kind="config_error")

    # ── Run pipeline (HTTP client selected on first network use) ─
    installer = Installer(
        config,
        fetcher,
        registry=registry,
        kernel_name=kernel_name,
        machine_name=machine_name,
        environ=environ,
        runner=runner,
        on_stage=on_stage,
    )

    try:
        ctx = installer.run()
    except InstallerError as e:
        logger.debug("Install failed at %s", e.stage, exc_info=True)
        return InstallResult.from_context(
            installer.context,
            binary_name=config.binary_name,
            fetcher=installer.fetcher_name,
            stage=e.stage or Stage.FAILED.value,
            error=str(e),
            error_kind=e.kind,
        )

    return InstallResult.from_context(
        ctx,
        ok=True,
        binary_name=config.binary_name,
        fetcher=installer.fetcher_name,
        stage=ctx.stage.value,
    )
