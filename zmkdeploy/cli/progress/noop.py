"""No-op progress display for silent operations."""

from typing import Any


class NoOpProgressDisplay:
    """No-op progress display that doesn't show anything."""

    def __enter__(self) -> "NoOpProgressDisplay":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        pass

    def start(self, message: str) -> None:
        """Start display (no-op)."""
        pass

    def stop(self) -> None:
        """Stop display (no-op)."""
        pass
