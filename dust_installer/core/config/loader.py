"""
Configuration loader — builds an InstallerConfig from file, environment and CLI.

Precedence, lowest to highest:
    defaults  <  YAML config file  <  environment variables  <  CLI options

The YAML file is optional.  It may be a flat mapping of
``InstallerConfig`` fields or have them nested under an ``installer:`` key.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from dust_installer.core.models.config import InstallerConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DUST_INSTALLER_CONFIG"

# Environment variable → config field
ENV_OVERRIDES: dict[str, str] = {
    "DUST_VERSION": "version",
    "DUST_INSTALL": "install_dir",
    "DUST_HTTP_CLIENT": "http_client",
}


class ConfigError(Exception):
    """Raised when installer configuration is invalid or unreadable."""


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML config file into a plain mapping.

    Raises:
        ConfigError: If the file is missing, unreadable or not a mapping.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading installer config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    section = data.get("installer", data)
    if not isinstance(section, dict):
        raise ConfigError(f"'installer' in {path} must be a mapping")
    return dict(section)


def env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    """Collect config fields set through environment variables.

    Empty values are ignored, matching the shell convention that an
    exported empty variable is unset.
    """
    values: dict[str, str] = {}
    for var, field_name in ENV_OVERRIDES.items():
        value = environ.get(var, "")
        if value.strip():
            values[field_name] = value
    return values


def load_config(
    path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> InstallerConfig:
    """Load and validate installer configuration.

    Args:
        path: Explicit YAML config path.  If None, ``$DUST_INSTALLER_CONFIG``
            is used when set; otherwise only defaults apply.
        environ: Environment to read overrides from (default: ``os.environ``).
        overrides: Highest-precedence values, typically CLI options.
            ``None`` values are skipped.

    Returns:
        Validated InstallerConfig.

    Raises:
        ConfigError: If the file or any value is invalid.
    """
    env = os.environ if environ is None else environ

    if path is None and env.get(CONFIG_ENV_VAR):
        path = Path(env[CONFIG_ENV_VAR])

    data: dict[str, Any] = read_config_file(path) if path is not None else {}
    data.update(env_overrides(env))
    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        config = InstallerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid installer configuration: {e}") from e

    logger.debug(
        "Config: repo=%s version=%s install_dir=%s http_client=%s",
        config.repo, config.version, config.install_dir, config.http_client,
    )
    return config
