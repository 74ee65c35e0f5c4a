"""
Mock fetcher — test double for the HTTP fetch capability.

Serves canned bodies per URL without touching the network and keeps a
log of every requested URL, so callers can assert how many requests a
run made.
"""

from __future__ import annotations

from collections.abc import Callable

from dust_installer.adapters.base import Fetcher
from dust_installer.core.models.fetch import FetchReceipt


class MockFetcher(Fetcher):
    """Universal mock fetcher for testing.

    Unknown URLs fail with HTTP 404 unless a default body is given.
    """

    def __init__(
        self,
        fetcher_name: str = "mock",
        available: bool = True,
        default_body: bytes | None = None,
    ):
        self._name = fetcher_name
        self._available = available
        self._default_body = default_body
        self._responses: dict[str, FetchReceipt] = {}
        self._call_log: list[str] = []
        self._hooks: list[Callable[[str], None]] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[str]:
        """Every URL this mock has been asked for, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def is_available(self) -> bool:
        return self._available

    def set_body(self, url: str, body: bytes) -> None:
        """Serve ``body`` for ``url``."""
        self._responses[url] = FetchReceipt.success(
            fetcher=self._name, url=url, body=body, http_status=200,
        )

    def set_failure(self, url: str, error: str = "Mock failure", http_status: int | None = None) -> None:
        """Configure ``url`` to fail."""
        self._responses[url] = FetchReceipt.failure(
            fetcher=self._name, url=url, error=error, http_status=http_status,
        )

    def on_fetch(self, hook: Callable[[str], None]) -> None:
        """Call ``hook(url)`` on every fetch, before the response is returned."""
        self._hooks.append(hook)

    def fetch(self, url: str, *, timeout: float | None = None) -> FetchReceipt:
        self._call_log.append(url)
        for hook in self._hooks:
            hook(url)

        if url in self._responses:
            return self._responses[url]

        if self._default_body is not None:
            return FetchReceipt.success(fetcher=self._name, url=url, body=self._default_body)

        return FetchReceipt.failure(
            fetcher=self._name,
            url=url,
            error="HTTP 404: Not Found",
            http_status=404,
        )

    def reset(self) -> None:
        """Clear call log, hooks and canned responses."""
        self._call_log.clear()
        self._responses.clear()
        self._hooks.clear()
