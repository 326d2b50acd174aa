"""zmk-deploy - flash GitHub-built ZMK firmware onto split keyboards."""

from importlib.metadata import distribution


__version__ = distribution("zmk-deploy").version

__all__ = ["__version__"]
