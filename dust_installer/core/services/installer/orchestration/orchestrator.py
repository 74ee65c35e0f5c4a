"""
L5 Orchestration — the installer state machine.

    Init → DetectPlatform → DetectArch → ResolveVersion → DeriveTarget
         → Retrieve → Install → Done

Every stage is a function of the RunContext built by the stages before
it.  The first ``InstallerError`` ends the run: it is stamped with the
failing stage and re-raised.  There is no retry edge.

The temporary working directory exists from the start of Retrieve to
the end of Install and is removed on every exit path.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable, Mapping
from pathlib import Path

from dust_installer.adapters.base import Fetcher
from dust_installer.adapters.registry import FetcherRegistry, default_registry
from dust_installer.core.errors import DownloadError, InstallerError
from dust_installer.core.models.config import InstallerConfig
from dust_installer.core.models.run import RunContext, Stage
from dust_installer.core.services.installer.detection.platform import (
    detect_arch,
    detect_platform,
    host_kernel_name,
    host_machine_name,
)
from dust_installer.core.services.installer.detection.tool_version import (
    get_installed_version,
)
from dust_installer.core.services.installer.domain.archive import (
    archive_spec,
    download_url,
    executable_name,
)
from dust_installer.core.services.installer.domain.shell_config import (
    on_search_path,
    shell_path_line,
    shell_type,
)
from dust_installer.core.services.installer.execution.download import download_archive
from dust_installer.core.services.installer.execution.extract import (
    extract_archive,
    locate_executable,
)
from dust_installer.core.services.installer.execution.install import (
    install_binary,
    resolve_install_target,
)
from dust_installer.core.services.installer.execution.subprocess_runner import (
    Runner,
    run_subprocess,
)
from dust_installer.core.services.installer.resolver.target import (
    derive_target,
    is_supported,
    unsupported_pair,
)
from dust_installer.core.services.installer.resolver.version import resolve_version

logger = logging.getLogger(__name__)

TEMP_PREFIX = "dust-install-"

StageListener = Callable[[Stage, RunContext], None]


class Installer:
    """One installer run.

    Args:
        config: Resolved installer configuration.
        fetcher: HTTP capability to use.  When None, one is selected
            from ``registry`` the first time a stage needs the network.
        registry: Fetcher registry (default: curl, wget, urllib).
        kernel_name: Raw OS name; read from the host when None.
        machine_name: Raw CPU name; read from the host when None.
        environ: Source of ``PATH`` and ``SHELL`` (default: ``os.environ``).
        runner: Subprocess runner used for elevation and the version check.
        on_stage: Called after each stage completes.
    """

    def __init__(
        self,
        config: InstallerConfig,
        fetcher: Fetcher | None = None,
        *,
        registry: FetcherRegistry | None = None,
        kernel_name: str | None = None,
        machine_name: str | None = None,
        environ: Mapping[str, str] | None = None,
        runner: Runner = run_subprocess,
        on_stage: StageListener | None = None,
    ):
        self.config = config
        self._fetcher = fetcher
        self._registry = registry
        self._kernel_name = kernel_name
        self._machine_name = machine_name
        self._environ = os.environ if environ is None else environ
        self._runner = runner
        self._on_stage = on_stage
        self.context = RunContext()
        self.workdir: Path | None = None

    @property
    def fetcher(self) -> Fetcher:
        """The run's HTTP client, selected once on first use.

        Raises:
            ToolingMissing: No client matching ``config.http_client`` is available.
        """
        if self._fetcher is None:
            registry = self._registry or default_registry()
            self._fetcher = registry.select(self.config.http_client)
        return self._fetcher

    @property
    def fetcher_name(self) -> str | None:
        """Name of the selected HTTP client, or None if none was needed yet."""
        return self._fetcher.name if self._fetcher is not None else None

    # ── Driver ──────────────────────────────────────────────────

    def run(self) -> RunContext:
        """Execute every stage in order.

        Raises:
            InstallerError: From the first failing stage, with ``stage`` set.
        """
        try:
            self._step(Stage.DETECT_PLATFORM, self._detect_platform)
            self._step(Stage.DETECT_ARCH, self._detect_arch)
            self._step(Stage.RESOLVE_VERSION, self._resolve_version)
            self._step(Stage.DERIVE_TARGET, self._derive_target)

            with self._workspace() as tmp:
                self.workdir = Path(tmp)
                logger.debug("Working directory: %s", tmp)
                self._step(Stage.RETRIEVE, self._retrieve)
                self._step(Stage.INSTALL, self._install)
        except InstallerError:
            self.context = self.context.advance(Stage.FAILED)
            raise

        self.context = self.context.advance(Stage.DONE)
        return self.context

    def _workspace(self) -> tempfile.TemporaryDirectory:
        """Create the run's temporary directory under ``config.temp_root``.

        Raises:
            DownloadError: The directory could not be created.
        """
        root = Path(self.config.temp_root).expanduser() if self.config.temp_root else None
        try:
            return tempfile.TemporaryDirectory(prefix=TEMP_PREFIX, dir=root)
        except OSError as e:
            self.context = self.context.advance(Stage.RETRIEVE)
            raise DownloadError(
                f"Cannot create temporary directory: {e}",
                stage=Stage.RETRIEVE.value,
            ) from e

    def _step(self, stage: Stage, fn: Callable[[RunContext], RunContext]) -> None:
        self.context = self.context.advance(stage)
        try:
            self.context = fn(self.context)
        except InstallerError as exc:
            if exc.stage is None:
                exc.stage = stage.value
            logger.debug("Stage %s failed: %s", stage.value, exc)
            raise
        if self._on_stage is not None:
            self._on_stage(stage, self.context)

    # ── Stages ──────────────────────────────────────────────────

    def _detect_platform(self, ctx: RunContext) -> RunContext:
        raw = self._kernel_name if self._kernel_name is not None else host_kernel_name()
        return ctx.assign(platform=detect_platform(raw))

    def _detect_arch(self, ctx: RunContext) -> RunContext:
        raw = self._machine_name if self._machine_name is not None else host_machine_name()
        arch = detect_arch(raw)
        # Reject unsupported pairs here, before version lookup hits the network.
        if not is_supported(ctx.platform, arch):
            raise unsupported_pair(ctx.platform, arch)
        return ctx.assign(arch=arch)

    def _resolve_version(self, ctx: RunContext) -> RunContext:
        version, pinned = resolve_version(
            self.config.version,
            None if self.config.version else self.fetcher,
            api_base=self.config.api_base,
            repo=self.config.repo,
            timeout=self.config.timeout,
        )
        return ctx.assign(version=version, version_pinned=pinned)

    def _derive_target(self, ctx: RunContext) -> RunContext:
        target = derive_target(ctx.platform, ctx.arch)
        logger.info("Target platform: %s", target.triple)
        ctx = ctx.assign(target=target)
        if not target.native:
            ctx = ctx.warn(target.warning)
        return ctx

    def _retrieve(self, ctx: RunContext) -> RunContext:
        assert self.workdir is not None
        archive = archive_spec(self.config.binary_name, ctx.version, ctx.target)
        url = download_url(self.config.download_base, self.config.repo, ctx.version, archive)
        ctx = ctx.assign(archive=archive, url=url)

        archive_path = download_archive(
            self.fetcher, url, archive, self.workdir, timeout=self.config.timeout,
        )
        extracted = extract_archive(archive_path, archive.extension, self.workdir / "extracted")
        binary = locate_executable(
            extracted, executable_name(self.config.binary_name, ctx.platform),
        )
        return ctx.assign(binary_path=binary)

    def _install(self, ctx: RunContext) -> RunContext:
        target = resolve_install_target(self.config)
        ctx = ctx.assign(install_target=target)

        installed, elevated = install_binary(
            ctx.binary_path,
            target,
            platform=ctx.platform,
            allow_elevation=self.config.allow_elevation,
            runner=self._runner,
        )
        ctx = ctx.assign(installed_path=installed, elevated=elevated)

        path_env = self._environ.get("PATH")
        if not on_search_path(target.directory, path_env):
            shell = shell_type(self._environ.get("SHELL"))
            ctx = ctx.warn(f"{target.directory} is not in your PATH")
            ctx = ctx.assign(path_hint=shell_path_line(shell, target.directory))

        version_output = get_installed_version(
            self.config.binary_name, path_env, runner=self._runner,
        )
        if version_output:
            ctx = ctx.assign(version_output=version_output)
        return ctx
