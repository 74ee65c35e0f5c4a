"""Adapters — bindings to external HTTP clients.

Public re-exports for convenient access.
"""

from dust_installer.adapters.base import Fetcher
from dust_installer.adapters.mock import MockFetcher
from dust_installer.adapters.registry import FetcherRegistry, default_registry

__all__ = [
    "Fetcher",
    "FetcherRegistry",
    "MockFetcher",
    "default_registry",
]
