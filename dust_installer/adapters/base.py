"""
Fetcher base — the protocol contract between the installer and HTTP clients.

The installer never talks to urllib, curl or wget directly.  It asks
a ``Fetcher`` for the bytes at a URL and receives a ``FetchReceipt``.
Which concrete fetcher backs a run is decided once, at startup, by the
``FetcherRegistry``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from dust_installer.core.models.fetch import FetchReceipt

USER_AGENT = "dust-installer"


class Fetcher(ABC):
    """Abstract base class for HTTP GET capabilities.

    Fetchers perform a single GET and return a receipt.
    They NEVER raise exceptions; failures are captured in the receipt.

    To add a fetcher:
        1. Subclass Fetcher
        2. Implement name, is_available, fetch
        3. Register it in the FetcherRegistry
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The fetcher identifier (e.g. 'urllib', 'curl')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the underlying client exists on this host.

        Should be fast and never raise.
        """

    @abstractmethod
    def fetch(self, url: str, *, timeout: float | None = None) -> FetchReceipt:
        """GET ``url`` following redirects and return the body.

        A non-2xx response is a failure.  ``timeout`` of None means the
        client's own default.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
