"""User-level path lookups (home, config directory, config file)."""

from __future__ import annotations

import os
from pathlib import Path

__all__ = [
    "APP_NAME",
    "config_file",
    "home",
    "user_config_dir",
]

APP_NAME = "kemenn"


def home() -> Path:
    """Get user's home directory.

    Honours HOME (USERPROFILE on Windows) first so tests and containers
    can redirect it, then falls back to Path.home().
    """
    for var in ("HOME", "USERPROFILE"):
        value = os.environ.get(var)
        if value:
            return Path(value)
    return Path.home()


def user_config_dir() -> Path:
    """Get the user configuration directory: $XDG_CONFIG_HOME/kemenn or ~/.config/kemenn."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return home() / ".config" / APP_NAME


def config_file() -> Path:
    """Location of config.toml; KEMENN_CONFIG overrides the default."""
    override = os.environ.get("KEMENN_CONFIG")
    if override:
        return Path(override).expanduser()
    return user_config_dir() / "config.toml"
