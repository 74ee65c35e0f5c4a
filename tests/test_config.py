"""
Tests for configuration loading — YAML file, environment, and CLI precedence.
"""

import textwrap
from pathlib import Path

import pytest

from dust_installer.core.config.loader import (
    ConfigError,
    env_overrides,
    load_config,
    read_config_file,
)


@pytest.fixture
def flat_yml(tmp_path: Path) -> Path:
    """A config file with fields at the top level."""
    content = textwrap.dedent("""\
        version: "1.0.0"
        install_dir: /opt/tools/bin
        http_client: wget
        timeout: 30
    """)
    path = tmp_path / "installer.yml"
    path.write_text(content)
    return path


@pytest.fixture
def wrapped_yml(tmp_path: Path) -> Path:
    """A config file with fields under an 'installer:' key."""
    content = textwrap.dedent("""\
        installer:
          repo: example/dust-fork
          user_bin_dir: ~/bin
          allow_elevation: false
        unrelated:
          key: value
    """)
    path = tmp_path / "installer.yml"
    path.write_text(content)
    return path


class TestReadConfigFile:
    def test_flat(self, flat_yml: Path):
        data = read_config_file(flat_yml)
        assert data["version"] == "1.0.0"
        assert data["timeout"] == 30

    def test_wrapped(self, wrapped_yml: Path):
        data = read_config_file(wrapped_yml)
        assert data["repo"] == "example/dust-fork"
        assert "unrelated" not in data

    def test_missing(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            read_config_file(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "bad.yml"
        path.write_text("version: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            read_config_file(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            read_config_file(path)

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert read_config_file(path) == {}


class TestEnvOverrides:
    def test_maps_variables(self):
        env = {"DUST_VERSION": "1.2.3", "DUST_INSTALL": "/x", "DUST_HTTP_CLIENT": "curl"}
        assert env_overrides(env) == {"version": "1.2.3", "install_dir": "/x", "http_client": "curl"}

    def test_empty_values_ignored(self):
        assert env_overrides({"DUST_VERSION": "", "DUST_INSTALL": "  "}) == {}

    def test_version_taken_verbatim(self):
        assert env_overrides({"DUST_VERSION": "v1.2.3"})["version"] == "v1.2.3"


class TestLoadConfig:
    def test_defaults(self):
        cfg = load_config(environ={})
        assert cfg.version is None
        assert cfg.install_dir is None
        assert cfg.http_client == "auto"

    def test_file(self, flat_yml: Path):
        cfg = load_config(flat_yml, environ={})
        assert cfg.version == "1.0.0"
        assert cfg.install_dir == "/opt/tools/bin"
        assert cfg.http_client == "wget"
        assert cfg.timeout == 30

    def test_file_from_env(self, wrapped_yml: Path):
        cfg = load_config(environ={"DUST_INSTALLER_CONFIG": str(wrapped_yml)})
        assert cfg.repo == "example/dust-fork"
        assert cfg.allow_elevation is False

    def test_env_beats_file(self, flat_yml: Path):
        cfg = load_config(flat_yml, environ={"DUST_VERSION": "2.0.0", "DUST_INSTALL": "/env/bin"})
        assert cfg.version == "2.0.0"
        assert cfg.install_dir == "/env/bin"
        assert cfg.http_client == "wget"

    def test_overrides_beat_env(self, flat_yml: Path):
        cfg = load_config(
            flat_yml,
            environ={"DUST_VERSION": "2.0.0"},
            overrides={"version": "3.0.0", "install_dir": None},
        )
        assert cfg.version == "3.0.0"
        assert cfg.install_dir == "/opt/tools/bin"

    def test_invalid_value(self, tmp_path: Path):
        path = tmp_path / "bad.yml"
        path.write_text("http_client: aria2\n")
        with pytest.raises(ConfigError, match="Invalid installer configuration"):
            load_config(path, environ={})

    def test_invalid_env_value(self):
        with pytest.raises(ConfigError):
            load_config(environ={"DUST_HTTP_CLIENT": "telnet"})
