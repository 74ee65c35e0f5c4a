"""
L1 Domain — search-path checks and shell profile advice (pure).
"""

from __future__ import annotations

import os
from pathlib import PurePath


def shell_type(shell_env: str | None) -> str:
    """Shell name from ``$SHELL`` (``/usr/bin/fish`` → ``fish``)."""
    if not shell_env:
        return "sh"
    return PurePath(shell_env).name or "sh"


def on_search_path(directory: str, path_env: str | None, pathsep: str = os.pathsep) -> bool:
    """Whether ``directory`` is one of the entries of ``path_env``.

    Trailing separators are ignored (``/usr/bin/`` matches ``/usr/bin``).
    """
    if not path_env:
        return False
    wanted = _normalize(directory)
    return any(_normalize(entry) == wanted for entry in path_env.split(pathsep) if entry)


def shell_path_line(shell: str, directory: str) -> str:
    """The line a user adds to their shell profile to put ``directory`` on PATH."""
    if shell == "fish":
        return f"set -gx PATH {directory} $PATH"
    # POSIX (bash, zsh, sh, dash, ash)
    return f'export PATH="{directory}:$PATH"'


def _normalize(entry: str) -> str:
    stripped = entry.rstrip("/\\")
    return stripped or entry
