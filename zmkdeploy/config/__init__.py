"""Configuration loading for zmk-deploy."""

from .settings import DeploySettings, load_settings


__all__ = ["DeploySettings", "load_settings"]
