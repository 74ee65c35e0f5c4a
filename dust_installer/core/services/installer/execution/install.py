"""
L4 Execution — Pick the install directory and copy the executable into it.

Directory probe order:
    1. explicit override (``DUST_INSTALL`` / ``--install-dir``)
    2. system-wide bin dir, only if writable
    3. per-user bin dir, created if missing

If the chosen directory is not writable the copy is retried through
the elevation runner (sudo).
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path

from dust_installer.core.errors import InstallPermissionError
from dust_installer.core.models.config import InstallerConfig
from dust_installer.core.models.platform import PlatformKey
from dust_installer.core.models.release import InstallTarget
from dust_installer.core.services.installer.execution.subprocess_runner import (
    Runner,
    run_subprocess,
)

logger = logging.getLogger(__name__)

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def _is_writable(path: Path) -> bool:
    return path.is_dir() and os.access(path, os.W_OK)


def _ensure_dir(path: Path) -> bool:
    """Create ``path`` if missing.  Returns whether it is writable."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.debug("Cannot create %s: %s", path, e)
        return False
    return _is_writable(path)


def resolve_install_target(config: InstallerConfig) -> InstallTarget:
    """Choose where the executable goes."""
    if config.install_dir:
        directory = Path(config.install_dir).expanduser()
        writable = _ensure_dir(directory)
        return InstallTarget(
            directory=str(directory),
            writable=writable,
            needs_elevation=not writable,
            source="override",
        )

    system_dir = Path(config.system_bin_dir).expanduser()
    if _is_writable(system_dir):
        return InstallTarget(directory=str(system_dir), writable=True, source="system")

    user_dir = Path(config.user_bin_dir).expanduser()
    writable = _ensure_dir(user_dir)
    if writable:
        logger.info("Using %s (%s not writable)", user_dir, system_dir)
    return InstallTarget(
        directory=str(user_dir),
        writable=writable,
        needs_elevation=not writable,
        source="user",
    )


def _make_executable(path: Path) -> None:
    try:
        mode = path.stat().st_mode
        path.chmod(mode | _EXEC_BITS)
    except OSError as e:
        logger.warning("Could not set executable permission on %s: %s", path, e)


def _install_elevated(
    binary: Path,
    dest: Path,
    *,
    runner: Runner,
) -> None:
    directory = dest.parent
    if not directory.is_dir():
        result = runner(["mkdir", "-p", str(directory)], needs_sudo=True)
        if not result.get("ok"):
            raise InstallPermissionError(
                f"Installation failed: cannot create {directory}: {_describe(result)}"
            )

    result = runner(["cp", str(binary), str(dest)], needs_sudo=True)
    if not result.get("ok"):
        raise InstallPermissionError(f"Installation failed: {_describe(result)}")

    chmod = runner(["chmod", "+x", str(dest)], needs_sudo=True)
    if not chmod.get("ok"):
        logger.warning("Could not set executable permission on %s: %s", dest, _describe(chmod))


def _describe(result: dict) -> str:
    error = result.get("error", "unknown error")
    stderr = (result.get("stderr") or "").strip()
    return f"{error}: {stderr}" if stderr else error


def install_binary(
    binary: Path,
    target: InstallTarget,
    *,
    platform: PlatformKey,
    allow_elevation: bool = True,
    runner: Runner = run_subprocess,
) -> tuple[Path, bool]:
    """Copy ``binary`` into ``target.directory`` and mark it executable.

    Returns:
        ``(installed_path, elevated)``.

    Raises:
        InstallPermissionError: The directory is not writable and the
            elevated copy failed, or elevation is not possible.
    """
    dest = Path(target.directory) / binary.name
    logger.info("Installing to %s", target.directory)

    if target.writable:
        try:
            shutil.copyfile(binary, dest)
        except PermissionError as e:
            logger.info("Direct copy to %s refused (%s), trying elevated", dest, e)
        except OSError as e:
            raise InstallPermissionError(f"Installation failed: {e}") from e
        else:
            _make_executable(dest)
            return dest, False

    if not allow_elevation:
        raise InstallPermissionError(
            f"{target.directory} is not writable and elevation is disabled. "
            "Set DUST_INSTALL to a writable directory."
        )
    if platform == PlatformKey.WINDOWS:
        raise InstallPermissionError(
            f"{target.directory} is not writable. "
            "Run from an administrator shell or set DUST_INSTALL."
        )

    logger.info("Installing with sudo (requires administrator privileges)")
    _install_elevated(binary, dest, runner=runner)
    return dest, True
