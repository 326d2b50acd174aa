"""XDG Base Directory specification helpers."""

import os
from pathlib import Path


APP_DIR_NAME = "zmk-deploy"


def get_xdg_config_dir() -> Path:
    """Get XDG config directory for zmk-deploy.

    Returns:
        Path to config directory: $XDG_CONFIG_HOME/zmk-deploy or ~/.config/zmk-deploy
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_xdg_cache_dir() -> Path:
    """Get XDG cache directory for zmk-deploy.

    Returns:
        Path to cache directory: $XDG_CACHE_HOME/zmk-deploy or ~/.cache/zmk-deploy
    """
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache) / APP_DIR_NAME
    return Path.home() / ".cache" / APP_DIR_NAME


def get_default_scratch_dir() -> Path:
    """Directory where artifacts are downloaded and extracted."""
    return get_xdg_cache_dir() / "tmp"
