"""Progress displays for CLI output."""

from rich.console import Console

from .noop import NoOpProgressDisplay
from .spinner import SpinnerProgressDisplay


def create_progress_display(console: Console | None = None) -> SpinnerProgressDisplay:
    """Factory function returning the spinner shown while waiting for drives."""
    return SpinnerProgressDisplay(console=console)


__all__ = ["NoOpProgressDisplay", "SpinnerProgressDisplay", "create_progress_display"]
