"""
L1 Domain — release naming and URLs (pure).

No I/O, no network.  Everything here is a deterministic function of
its arguments.
"""

from __future__ import annotations

import re

from dust_installer.core.models.platform import PlatformKey, Target
from dust_installer.core.models.release import ArchiveSpec
from dust_installer.core.services.installer.data.targets import (
    ARCHIVE_EXTENSIONS,
    DEFAULT_ARCHIVE_EXTENSION,
    EXECUTABLE_SUFFIXES,
)

# Only the tag field is read; the rest of the release document is ignored.
_TAG_NAME_RE = re.compile(r'"tag_name"\s*:\s*"v?([^"]+)"')


def archive_spec(binary_name: str, version: str, target: Target) -> ArchiveSpec:
    """Archive for ``version`` on ``target``.

    e.g. ``dust-v1.2.3-x86_64-unknown-linux-musl.tar.gz``
    """
    ext = ARCHIVE_EXTENSIONS.get(target.platform, DEFAULT_ARCHIVE_EXTENSION)
    return ArchiveSpec(
        name=f"{binary_name}-v{version}-{target.triple}.{ext}",
        extension=ext,
    )


def executable_name(binary_name: str, platform: PlatformKey) -> str:
    """Filename of the executable inside the archive."""
    return binary_name + EXECUTABLE_SUFFIXES.get(platform, "")


def latest_release_url(api_base: str, repo: str) -> str:
    return f"{api_base}/repos/{repo}/releases/latest"


def download_url(download_base: str, repo: str, version: str, archive: ArchiveSpec) -> str:
    return f"{download_base}/{repo}/releases/download/v{version}/{archive.name}"


def fmt_size(n: int | float) -> str:
    """Format byte count to human-readable string."""
    for unit in ("B", "KB", "MB", "GB"):
        if n < 1024:
            return f"{n:.1f} {unit}"
        n /= 1024
    return f"{n:.1f} TB"


def parse_release_tag(body: str) -> str | None:
    """Extract the version from a latest-release response.

    Returns the ``tag_name`` value with one leading ``v`` removed, or
    None if the body has no tag.
    """
    match = _TAG_NAME_RE.search(body)
    if not match:
        return None
    tag = match.group(1).strip()
    return tag or None
