"""
L3 Detection — post-install confirmation.

Read-only probes: is the installed binary on PATH, and what does
``<binary> --version`` print.
"""

from __future__ import annotations

import logging
import shutil

from dust_installer.core.services.installer.execution.subprocess_runner import (
    Runner,
    run_subprocess,
)

logger = logging.getLogger(__name__)


def find_on_path(binary_name: str, path_env: str | None) -> str | None:
    """Resolve ``binary_name`` against ``path_env`` like the shell would."""
    return shutil.which(binary_name, path=path_env)


def get_installed_version(
    binary_name: str,
    path_env: str | None,
    *,
    runner: Runner = run_subprocess,
    timeout: float = 10,
) -> str | None:
    """Run ``<binary> --version`` if the binary resolves on the search path.

    Returns:
        The command's trimmed output, or None when the binary is not
        on PATH or the command fails.  Never raises.
    """
    resolved = find_on_path(binary_name, path_env)
    if resolved is None:
        logger.debug("%s not on PATH, skipping version check", binary_name)
        return None

    result = runner([resolved, "--version"], timeout=timeout)
    if not result.get("ok"):
        logger.warning("Version check failed for %s: %s", resolved, result.get("error"))
        return None

    output = (result.get("stdout") or "").strip()
    return output or None
