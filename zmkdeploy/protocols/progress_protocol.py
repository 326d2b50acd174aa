"""Protocol for the progress indicator shown while waiting for a drive."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class WaitProgressProtocol(Protocol):
    """Indicator shown while a drive wait is polling."""

    def start(self, message: str) -> None:
        """Show the indicator with ``message``."""
        ...

    def stop(self) -> None:
        """Clear the indicator. Safe to call when not started."""
        ...
