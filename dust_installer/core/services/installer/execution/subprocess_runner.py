"""
L4 Execution — Core subprocess runner.

The single place where ``subprocess.run`` is called for install
operations: elevated copies, permission changes and the post-install
version check.  Logging and error capture are centralised here.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class Runner(Protocol):
    def __call__(
        self,
        cmd: list[str],
        *,
        needs_sudo: bool = False,
        timeout: float | None = None,
    ) -> dict[str, Any]: ...


def is_root() -> bool:
    """Whether the process already runs with root privileges (POSIX only)."""
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def run_subprocess(
    cmd: list[str],
    *,
    needs_sudo: bool = False,
    timeout: float | None = None,
) -> dict[str, Any]:
    """Run a command, optionally through ``sudo``.

    stdin is left attached to the terminal so sudo can prompt for a
    password itself; the password never passes through this process.

    Args:
        cmd: Command list for ``subprocess.run()``.
        needs_sudo: Prefix with ``sudo`` unless already root.
        timeout: Seconds before ``TimeoutExpired``; None waits forever.

    Returns:
        ``{"ok": True, "stdout": "...", "elapsed_ms": N}`` on success,
        ``{"ok": False, "error": "...", ...}`` on failure.
    """
    # ── Sudo handling ──
    if needs_sudo and not is_root():
        if shutil.which("sudo") is None:
            return {
                "ok": False,
                "needs_sudo": True,
                "error": "Administrator privileges required but sudo is not available",
            }
        cmd = ["sudo"] + cmd

    logger.debug("Running: %s", " ".join(cmd))

    # ── Execute ──
    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return {"ok": False, "error": f"Command timed out ({timeout}s)"}
    except Exception as e:
        logger.debug("Subprocess error: %s", cmd, exc_info=True)
        return {"ok": False, "error": str(e)}

    elapsed_ms = int((time.monotonic() - start) * 1000)

    if result.returncode == 0:
        return {
            "ok": True,
            "stdout": result.stdout[-2000:] if result.stdout else "",
            "elapsed_ms": elapsed_ms,
        }

    stderr = result.stderr[-2000:] if result.stderr else ""
    return {
        "ok": False,
        "error": f"Command failed (exit {result.returncode})",
        "stderr": stderr,
        "stdout": result.stdout[-2000:] if result.stdout else "",
        "elapsed_ms": elapsed_ms,
    }
