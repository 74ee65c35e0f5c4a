"""
L4 Execution — Archive extraction and executable lookup.

Codecs are keyed by ``ArchiveSpec.extension``.  The release layout
may nest the executable in a directory, so lookup walks the whole
extracted tree.
"""

from __future__ import annotations

import logging
import tarfile
import zipfile
from collections.abc import Callable
from pathlib import Path

from dust_installer.core.errors import ArtifactNotFound, ExtractionError, ToolingMissing

logger = logging.getLogger(__name__)


def _extract_tarball(archive: Path, dest: Path) -> None:
    with tarfile.open(archive, "r:gz") as tf:
        tf.extractall(dest, filter="data")


def _extract_zip(archive: Path, dest: Path) -> None:
    with zipfile.ZipFile(archive, "r") as zf:
        zf.extractall(dest)


ARCHIVE_CODECS: dict[str, Callable[[Path, Path], None]] = {
    "tar.gz": _extract_tarball,
    "zip": _extract_zip,
}


def extract_archive(archive: Path, extension: str, dest: Path) -> Path:
    """Unpack ``archive`` into ``dest`` (created if needed).

    Raises:
        ToolingMissing: No codec is registered for ``extension``.
        ExtractionError: The archive is corrupt or could not be written out.
    """
    codec = ARCHIVE_CODECS.get(extension)
    if codec is None:
        raise ToolingMissing(f"No extractor available for .{extension} archives")

    logger.info("Extracting archive %s", archive.name)
    dest.mkdir(parents=True, exist_ok=True)

    try:
        codec(archive, dest)
    except (tarfile.TarError, zipfile.BadZipFile, EOFError, OSError) as exc:
        raise ExtractionError(f"Extraction failed: {exc}") from exc

    return dest


def locate_executable(root: Path, filename: str) -> Path:
    """Find ``filename`` anywhere under ``root``.

    The shallowest match wins; ties are broken by path so the choice
    does not depend on directory listing order.

    Raises:
        ArtifactNotFound: No regular file called ``filename`` exists.
    """
    matches = [p for p in root.rglob(filename) if p.is_file()]
    if matches:
        matches.sort(key=lambda p: (len(p.relative_to(root).parts), str(p)))
        found = matches[0]
        logger.debug("Found %s at %s", filename, found)
        return found

    available = sorted(
        str(p.relative_to(root)) for p in root.rglob("*") if p.is_file()
    )[:10]
    detail = f" (archive contains: {', '.join(available)})" if available else " (archive is empty)"
    raise ArtifactNotFound(f"Binary '{filename}' not found in archive{detail}")
