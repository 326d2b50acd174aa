"""Drive waiting state management for deployments."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from zmkdeploy.models.deploy import Side


class WaitPhase(str, Enum):
    """Phases of a drive wait."""

    AWAITING_ABSENCE = "awaiting_absence"
    POLLING = "polling"
    FOUND = "found"


@dataclass
class DriveWaitState:
    """State machine for one drive wait.

    A standard wait starts in POLLING. A fresh wait starts in
    AWAITING_ABSENCE and only starts polling once the locator has reported no
    volume, so a volume still mounted from the previous half is never taken
    for the new one.
    """

    side: Side
    fresh: bool = False
    phase: WaitPhase = WaitPhase.POLLING
    drive: Path | None = None
    checks: int = 0

    @classmethod
    def begin(cls, side: Side, fresh: bool = False) -> "DriveWaitState":
        phase = WaitPhase.AWAITING_ABSENCE if fresh else WaitPhase.POLLING
        return cls(side=side, fresh=fresh, phase=phase)

    @property
    def is_found(self) -> bool:
        return self.phase is WaitPhase.FOUND

    @property
    def is_polling(self) -> bool:
        return self.phase is WaitPhase.POLLING

    def observe(self, volume: Path | None) -> WaitPhase:
        """Feed one locator result and return the new phase."""
        self.checks += 1

        if self.phase is WaitPhase.AWAITING_ABSENCE:
            if volume is None:
                self.phase = WaitPhase.POLLING
        elif self.phase is WaitPhase.POLLING:
            if volume is not None:
                self.drive = volume
                self.phase = WaitPhase.FOUND

        return self.phase
