"""Utility helpers for zmk-deploy."""

from .xdg import get_default_scratch_dir, get_xdg_cache_dir, get_xdg_config_dir


__all__ = ["get_default_scratch_dir", "get_xdg_cache_dir", "get_xdg_config_dir"]
