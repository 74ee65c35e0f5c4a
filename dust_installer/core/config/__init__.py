"""Installer configuration loading."""

from dust_installer.core.config.loader import ConfigError, load_config

__all__ = ["ConfigError", "load_config"]
