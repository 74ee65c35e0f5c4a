"""
Fetcher registry — pick the HTTP client for a run, once.

The registry knows every fetcher the installer can use.  On first network use
``select()`` resolves the configured preference to one concrete
fetcher; the rest of the run only ever sees that instance.
"""

from __future__ import annotations

import logging
from typing import Any

from dust_installer.adapters.base import Fetcher
from dust_installer.core.errors import ToolingMissing

logger = logging.getLogger(__name__)

# Order tried when the preference is "auto".
AUTO_ORDER: tuple[str, ...] = ("curl", "wget", "urllib")


class FetcherRegistry:
    """Central registry of HTTP fetchers.

    Features:
        - Register/unregister fetchers by name
        - Query availability of every registered fetcher
        - Resolve a preference ("auto" or a name) to one fetcher
    """

    def __init__(self) -> None:
        self._fetchers: dict[str, Fetcher] = {}

    def register(self, fetcher: Fetcher) -> None:
        name = fetcher.name
        if name in self._fetchers:
            logger.warning("Overwriting existing fetcher: %s", name)
        self._fetchers[name] = fetcher
        logger.debug("Registered fetcher: %s", name)

    def unregister(self, name: str) -> None:
        self._fetchers.pop(name, None)

    def get(self, name: str) -> Fetcher | None:
        return self._fetchers.get(name)

    def list_fetchers(self) -> list[str]:
        return list(self._fetchers.keys())

    def fetcher_status(self) -> dict[str, dict[str, Any]]:
        """Get availability status of all registered fetchers."""
        status = {}
        for name, fetcher in self._fetchers.items():
            try:
                available = fetcher.is_available()
            except Exception:
                available = False
            status[name] = {
                "name": name,
                "available": available,
                "type": fetcher.__class__.__name__,
            }
        return status

    def select(self, preference: str = "auto") -> Fetcher:
        """Resolve ``preference`` to an available fetcher.

        Args:
            preference: ``"auto"`` to take the first available fetcher
                in ``AUTO_ORDER`` (then any other registered one), or
                the name of a specific fetcher.

        Raises:
            ToolingMissing: If no matching fetcher is available.
        """
        if preference != "auto":
            fetcher = self._fetchers.get(preference)
            if fetcher is None:
                raise ToolingMissing(f"Unknown HTTP client '{preference}'")
            if not fetcher.is_available():
                raise ToolingMissing(
                    f"HTTP client '{preference}' is not available on this host"
                )
            logger.debug("Using HTTP client: %s", fetcher.name)
            return fetcher

        ordered = [n for n in AUTO_ORDER if n in self._fetchers]
        ordered += [n for n in self._fetchers if n not in ordered]
        for name in ordered:
            fetcher = self._fetchers[name]
            if fetcher.is_available():
                logger.debug("Using HTTP client: %s", name)
                return fetcher

        raise ToolingMissing(
            "No HTTP client available. Please install curl or wget."
        )


def default_registry() -> FetcherRegistry:
    """Registry with every built-in fetcher."""
    from dust_installer.adapters.http import CurlFetcher, UrllibFetcher, WgetFetcher

    registry = FetcherRegistry()
    registry.register(CurlFetcher())
    registry.register(WgetFetcher())
    registry.register(UrllibFetcher())
    return registry
