"""Path utility helpers."""
from __future__ import annotations

import os
from pathlib import Path


def normalise_path(path: Path) -> Path:
    """Return an absolute path with ``~`` expanded."""

    return Path(os.path.expandvars(str(path))).expanduser().resolve()


def user_cache_dir() -> Path:
    """Per-user cache directory: ``$XDG_CACHE_HOME`` or ``~/.cache``."""

    xdg = os.environ.get("XDG_CACHE_HOME")
    if xdg and os.path.isabs(xdg):
        return Path(xdg)
    return Path.home() / ".cache"


def user_config_dir() -> Path:
    """Per-user config directory: ``$XDG_CONFIG_HOME`` or ``~/.config``."""

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg and os.path.isabs(xdg):
        return Path(xdg)
    return Path.home() / ".config"
