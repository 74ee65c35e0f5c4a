"""
L2 Resolver — which release to install.

A pinned version is used as-is and never touches the network.
Otherwise the release index is asked once for its latest release.
"""

from __future__ import annotations

import logging

from dust_installer.adapters.base import Fetcher
from dust_installer.core.errors import NetworkError
from dust_installer.core.services.installer.domain.archive import (
    latest_release_url,
    parse_release_tag,
)

logger = logging.getLogger(__name__)


def fetch_latest_version(
    fetcher: Fetcher,
    *,
    api_base: str,
    repo: str,
    timeout: float | None = None,
) -> str:
    """Ask the release index for the latest version of ``repo``.

    One request, no retry.

    Raises:
        NetworkError: The request failed, the body was empty, or it
            carried no ``tag_name``.
    """
    url = latest_release_url(api_base, repo)
    logger.info("Fetching latest version from %s", url)

    receipt = fetcher.fetch(url, timeout=timeout)
    if receipt.failed:
        raise NetworkError(f"Failed to fetch latest version: {receipt.error}")
    if not receipt.body:
        raise NetworkError("Failed to fetch latest version: empty response")

    version = parse_release_tag(receipt.body.decode("utf-8", errors="replace"))
    if version is None:
        raise NetworkError("Failed to fetch latest version: no tag_name in response")

    logger.info("Latest version: v%s", version)
    return version


def resolve_version(
    pinned: str | None,
    fetcher: Fetcher | None,
    *,
    api_base: str,
    repo: str,
    timeout: float | None = None,
) -> tuple[str, bool]:
    """Return ``(version, pinned)``.

    Raises:
        NetworkError: No pin and the latest-version lookup failed, or no
            fetcher was supplied.
    """
    if pinned:
        logger.info("Using pinned version: %s", pinned)
        return pinned, True

    if fetcher is None:
        raise NetworkError("No HTTP client configured to look up the latest version")

    return fetch_latest_version(fetcher, api_base=api_base, repo=repo, timeout=timeout), False
