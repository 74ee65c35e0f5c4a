"""
Command-line fetchers — GET through the host's ``curl`` or ``wget``.

Both write the response body to stdout and signal HTTP errors through
a non-zero exit code, so one adapter class covers them.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from abc import abstractmethod

from dust_installer.adapters.base import Fetcher
from dust_installer.core.models.fetch import FetchReceipt

logger = logging.getLogger(__name__)


class CommandFetcher(Fetcher):
    """Run an external HTTP client and capture its stdout as the body.

    Subclasses provide ``executable`` and ``build_command``.
    """

    executable: str = ""

    @property
    def name(self) -> str:
        return self.executable

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    @abstractmethod
    def build_command(self, url: str, timeout: float | None) -> list[str]:
        """Argument vector that writes the body of ``url`` to stdout."""

    def fetch(self, url: str, *, timeout: float | None = None) -> FetchReceipt:
        cmd = self.build_command(url, timeout)
        logger.debug("GET %s (%s)", url, " ".join(cmd[:-1]))
        start = time.monotonic()

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                # Let the client's own timeout fire first.
                timeout=None if timeout is None else timeout + 5,
            )
        except subprocess.TimeoutExpired:
            return FetchReceipt.failure(
                fetcher=self.name,
                url=url,
                error=f"{self.executable} timed out after {timeout}s",
            )
        except Exception as e:
            return FetchReceipt.failure(
                fetcher=self.name,
                url=url,
                error=f"{self.executable} could not run: {e}",
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            return FetchReceipt.failure(
                fetcher=self.name,
                url=url,
                error=stderr or f"{self.executable} exited with code {result.returncode}",
                duration_ms=elapsed_ms,
                metadata={"return_code": result.returncode},
            )

        return FetchReceipt.success(
            fetcher=self.name,
            url=url,
            body=result.stdout,
            duration_ms=elapsed_ms,
        )


class CurlFetcher(CommandFetcher):
    """``curl -sSfL <url>``"""

    executable = "curl"

    def build_command(self, url: str, timeout: float | None) -> list[str]:
        cmd = ["curl", "-sSfL"]
        if timeout is not None:
            cmd += ["--max-time", str(timeout)]
        return cmd + [url]


class WgetFetcher(CommandFetcher):
    """``wget -qO- <url>``"""

    executable = "wget"

    def build_command(self, url: str, timeout: float | None) -> list[str]:
        cmd = ["wget", "-qO-"]
        if timeout is not None:
            cmd += [f"--timeout={timeout}"]
        return cmd + [url]
