"""Configuration management using lib_layered_config.

Purpose
-------
Provides a centralized configuration loader that merges defaults, application
configs, host configs, user configs, .env files, and environment variables
following a deterministic precedence order.

Contents
--------
* :func:`get_config` – loads configuration with lib_layered_config
* :func:`get_default_config_path` – returns path to bundled default config
* :func:`get_upgrade_settings` – returns the dotnet toolchain settings
* :func:`get_log_level` – returns the configured logging level name

Configuration identifiers (vendor, app, slug) are imported from
:mod:`nuget_upgrade.__init__conf__` as LAYEREDCONF_* constants.

System Role
-----------
Acts as the configuration adapter layer, bridging lib_layered_config with the
application's runtime needs while keeping the upgrade flow decoupled from
configuration mechanics.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from lib_layered_config import Config, read_config

from . import __init__conf__

# Environment variable prefix for native (short) env vars
_ENV_PREFIX = "NUGET_UPGRADE_"

DEFAULT_DOTNET = "dotnet"
DEFAULT_OUTDATED_TOOL_PACKAGE = "dotnet-outdated-tool"
DEFAULT_LOG_LEVEL = "WARNING"


def get_default_config_path() -> Path:
    """Return the path to the bundled default configuration file.

    Returns:
        Absolute path to defaultconfig.toml.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return Path(__file__).parent / "defaultconfig.toml"


@lru_cache(maxsize=1)
def get_config(*, start_dir: str | None = None) -> Config:
    """Load layered configuration with application defaults.

    Loads configuration from multiple sources in precedence order:
    defaults → app → host → user → dotenv → env

    Args:
        start_dir: Optional directory that seeds .env discovery. Defaults to
            current working directory when None.

    Returns:
        Immutable configuration object with provenance tracking.

    Note:
        Cached (maxsize=1); tests that change the environment call
        ``get_config.cache_clear()``.
    """
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


@dataclass(frozen=True, slots=True)
class UpgradeSettings:
    """Immutable settings for the dotnet toolchain calls.

    Attributes:
        dotnet: Executable used for every call (name on PATH or full path).
        outdated_tool_package: Global tool package providing ``dotnet outdated``.
    """

    dotnet: str = DEFAULT_DOTNET
    outdated_tool_package: str = DEFAULT_OUTDATED_TOOL_PACKAGE


def get_upgrade_settings() -> UpgradeSettings:
    """Get toolchain settings from configuration with environment variable overrides.

    Settings are resolved in the following precedence order (highest wins):
    1. Native environment variables (NUGET_UPGRADE_DOTNET, NUGET_UPGRADE_OUTDATED_TOOL_PACKAGE)
    2. lib_layered_config environment variables (NUGET_UPGRADE___UPGRADE__*)
    3. User config file (~/.config/nuget-upgrade/config.toml)
    4. Host config file
    5. Application config file
    6. Default config (bundled defaultconfig.toml)

    Empty values fall back to the built-in defaults.

    Returns:
        UpgradeSettings with resolved values.
    """
    section = get_config().get("upgrade", default={})

    dotnet = section.get("dotnet", DEFAULT_DOTNET)
    tool_package = section.get("outdated_tool_package", DEFAULT_OUTDATED_TOOL_PACKAGE)

    if env_dotnet := os.environ.get(f"{_ENV_PREFIX}DOTNET"):
        dotnet = env_dotnet
    if env_package := os.environ.get(f"{_ENV_PREFIX}OUTDATED_TOOL_PACKAGE"):
        tool_package = env_package

    return UpgradeSettings(
        dotnet=str(dotnet) if dotnet else DEFAULT_DOTNET,
        outdated_tool_package=str(tool_package) if tool_package else DEFAULT_OUTDATED_TOOL_PACKAGE,
    )


def get_log_level() -> str:
    """Return the configured logging level name, upper-cased."""
    section = get_config().get("logging", default={})
    level = section.get("level", DEFAULT_LOG_LEVEL)
    return str(level).upper() if level else DEFAULT_LOG_LEVEL


__all__ = [
    "UpgradeSettings",
    "get_config",
    "get_default_config_path",
    "get_log_level",
    "get_upgrade_settings",
]
