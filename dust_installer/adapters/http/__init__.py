"""HTTP fetchers — concrete GET capabilities."""

from dust_installer.adapters.http.command import CommandFetcher, CurlFetcher, WgetFetcher
from dust_installer.adapters.http.urllib_fetcher import UrllibFetcher

__all__ = [
    "CommandFetcher",
    "CurlFetcher",
    "UrllibFetcher",
    "WgetFetcher",
]
