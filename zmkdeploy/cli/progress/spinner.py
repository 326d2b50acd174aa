"""Spinner progress display for drive waits."""

from typing import Any

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from zmkdeploy.cli.helpers.theme import DEPLOY_THEME


class SpinnerProgressDisplay:
    """Transient Rich spinner, removed from the terminal when stopped."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(theme=DEPLOY_THEME, highlight=False)
        self._progress: Progress | None = None

    def __enter__(self) -> "SpinnerProgressDisplay":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.stop()

    @property
    def is_spinning(self) -> bool:
        return self._progress is not None

    def start(self, message: str) -> None:
        """Start spinning with ``message``, replacing any running spinner."""
        self.stop()
        progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True,
        )
        progress.add_task(message, total=None)
        progress.start()
        self._progress = progress

    def stop(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
