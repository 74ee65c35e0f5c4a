"""
L4 Execution — Archive download.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dust_installer.adapters.base import Fetcher
from dust_installer.core.errors import DownloadError
from dust_installer.core.models.release import ArchiveSpec
from dust_installer.core.services.installer.domain.archive import fmt_size

logger = logging.getLogger(__name__)


def download_archive(
    fetcher: Fetcher,
    url: str,
    archive: ArchiveSpec,
    dest_dir: Path,
    *,
    timeout: float | None = None,
) -> Path:
    """Download ``url`` into ``dest_dir/<archive name>``.

    Raises:
        DownloadError: The request failed or the body was empty.
    """
    logger.info("Downloading from: %s", url)

    receipt = fetcher.fetch(url, timeout=timeout)
    if receipt.failed:
        raise DownloadError(f"Download failed: {receipt.error}")
    if not receipt.body:
        raise DownloadError(f"Download failed: empty response from {url}")

    path = dest_dir / archive.name
    try:
        path.write_bytes(receipt.body)
    except OSError as e:
        raise DownloadError(f"Cannot write {path}: {e}") from e

    logger.info("Downloaded %s (%s)", archive.name, fmt_size(receipt.size))
    return path
