"""Wait for a keyboard half's bootloader volume to mount."""

import time
from collections.abc import Callable
from pathlib import Path

from rich.markup import escape

from zmkdeploy.cli.helpers.theme import ThemedConsole, format_side, get_themed_console
from zmkdeploy.core.structlog_logger import get_struct_logger
from zmkdeploy.firmware.volumes import VolumeLocator
from zmkdeploy.firmware.wait_state import DriveWaitState, WaitPhase
from zmkdeploy.models.deploy import Side
from zmkdeploy.protocols.progress_protocol import WaitProgressProtocol


logger = get_struct_logger(__name__)


class DriveAwaiter:
    """Poll a VolumeLocator until a bootloader volume shows up.

    There is no timeout: the wait ends when a volume is found or the process
    is interrupted.
    """

    def __init__(
        self,
        locator: VolumeLocator,
        progress: WaitProgressProtocol | None = None,
        console: ThemedConsole | None = None,
        poll_interval: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if progress is None:
            from zmkdeploy.cli.progress import NoOpProgressDisplay

            progress = NoOpProgressDisplay()

        self.locator = locator
        self.progress = progress
        self.console = console or get_themed_console()
        self.poll_interval = poll_interval
        self.sleep = sleep

    def wait_for_drive(self, side: Side, fresh: bool = False) -> Path:
        """Block until the bootloader volume for ``side`` is mounted.

        Args:
            side: Keyboard half being waited for, used in messages
            fresh: Require the volume to be absent once before accepting one

        Returns:
            Path of the mounted volume
        """
        state = DriveWaitState.begin(side, fresh=fresh)
        message = (
            "Waiting for bootloader volume, double-click the reset button on the "
            f"{format_side(side)} part of your keyboard..."
        )
        logger.info("waiting_for_drive", side=side.value, fresh=fresh)

        self.console.print()
        try:
            if state.is_polling:
                self.progress.start(message)

            while True:
                previous = state.phase
                phase = state.observe(self.locator.locate())

                drive = state.drive
                if phase is WaitPhase.FOUND and drive is not None:
                    self.progress.stop()
                    logger.info(
                        "drive_found",
                        side=side.value,
                        drive=str(drive),
                        checks=state.checks,
                    )
                    self.console.print(
                        f"Found {format_side(side)} side keyboard at "
                        f"{escape(str(drive))}"
                    )
                    return drive

                if previous is WaitPhase.AWAITING_ABSENCE and phase is WaitPhase.POLLING:
                    logger.debug("previous_drive_gone", side=side.value)
                    self.progress.start(message)
                    continue

                self.sleep(self.poll_interval)
        finally:
            self.progress.stop()
