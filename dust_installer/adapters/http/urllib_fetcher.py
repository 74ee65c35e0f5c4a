"""
urllib fetcher — stdlib HTTP client, always available.
"""

from __future__ import annotations

import logging
import time
import urllib.error
import urllib.request

from dust_installer import __version__
from dust_installer.adapters.base import USER_AGENT, Fetcher
from dust_installer.core.models.fetch import FetchReceipt

logger = logging.getLogger(__name__)


class UrllibFetcher(Fetcher):
    """GET via ``urllib.request``.  Redirects are followed by urllib."""

    @property
    def name(self) -> str:
        return "urllib"

    def is_available(self) -> bool:
        return True

    def fetch(self, url: str, *, timeout: float | None = None) -> FetchReceipt:
        logger.debug("GET %s (urllib)", url)
        req = urllib.request.Request(
            url,
            headers={"User-Agent": f"{USER_AGENT}/{__version__}"},
        )
        start = time.monotonic()

        try:
            if timeout is None:
                resp_ctx = urllib.request.urlopen(req)
            else:
                resp_ctx = urllib.request.urlopen(req, timeout=timeout)
            with resp_ctx as resp:
                body = resp.read()
                code = resp.getcode()
        except urllib.error.HTTPError as exc:
            return FetchReceipt.failure(
                fetcher=self.name,
                url=url,
                error=f"HTTP {exc.code}: {exc.reason}",
                http_status=exc.code,
                duration_ms=int((time.monotonic() - start) * 1000),
            )
        except Exception as exc:
            return FetchReceipt.failure(
                fetcher=self.name,
                url=url,
                error=f"Request failed: {exc}",
                duration_ms=int((time.monotonic() - start) * 1000),
            )

        return FetchReceipt.success(
            fetcher=self.name,
            url=url,
            body=body,
            http_status=code,
            duration_ms=int((time.monotonic() - start) * 1000),
        )
