"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from dust_installer.adapters.mock import MockFetcher
from dust_installer.core.models.config import InstallerConfig
from tests.installer.fakes import FakeRunner


@pytest.fixture
def fetcher() -> MockFetcher:
    return MockFetcher()


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def dirs(tmp_path: Path) -> dict[str, Path]:
    """Isolated system/user/temp directories for one run."""
    paths = {
        "system": tmp_path / "system-bin",
        "user": tmp_path / "home" / ".local" / "bin",
        "temp": tmp_path / "tmp",
    }
    paths["temp"].mkdir()
    return paths


@pytest.fixture
def make_config(dirs: dict[str, Path]):
    """Factory for an InstallerConfig pointed at the isolated dirs."""

    def _make(**kwargs: Any) -> InstallerConfig:
        values: dict[str, Any] = {
            "system_bin_dir": str(dirs["system"]),
            "user_bin_dir": str(dirs["user"]),
            "temp_root": str(dirs["temp"]),
            "http_client": "urllib",
        }
        values.update(kwargs)
        return InstallerConfig(**values)

    return _make
