"""Copy firmware images onto bootloader volumes."""

import errno
import shutil
import time
from collections.abc import Callable
from pathlib import Path

from zmkdeploy.cli.helpers.theme import ThemedConsole, format_side, get_themed_console
from zmkdeploy.core.errors import CopyFailedError
from zmkdeploy.core.structlog_logger import get_struct_logger
from zmkdeploy.models.deploy import FirmwareImage


logger = get_struct_logger(__name__)

# The bootloader unmounts itself as soon as it has received a complete image,
# which surfaces as one of these while the copy is still closing the file.
DISCONNECT_ERRNOS = frozenset({errno.EIO, errno.ENODEV, errno.ENXIO})


def is_disconnect_error(error: OSError) -> bool:
    return error.errno in DISCONNECT_ERRNOS


class FirmwareCopier:
    """Copy a firmware image onto a mounted bootloader volume.

    Error policy:
    - device disconnected during the copy: success
    - permission denied: wait ``retry_delay`` seconds and retry once
    - anything else, or a failed retry: ``CopyFailedError``
    """

    def __init__(
        self,
        console: ThemedConsole | None = None,
        retry_delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
        copy_file: Callable[[Path, Path], object] = shutil.copyfile,
    ) -> None:
        self.console = console or get_themed_console()
        self.retry_delay = retry_delay
        self.sleep = sleep
        self.copy_file = copy_file

    def copy(self, image: FirmwareImage, drive: Path) -> str:
        """Copy ``image`` to ``drive`` and return the confirmed filename.

        Raises:
            CopyFailedError: If the copy fails for any reason other than the
                device disconnecting
        """
        try:
            return self._attempt_copy(image, drive)
        except PermissionError as e:
            logger.warning(
                "copy_permission_denied_retrying",
                side=image.side.value,
                drive=str(drive),
                error=str(e),
            )
            self.console.print(
                f"Permission denied, retrying {format_side(image.side)} side deployment..."
            )
            self.sleep(self.retry_delay)
            try:
                return self._attempt_copy(image, drive)
            except OSError as retry_error:
                raise CopyFailedError(image.side, retry_error) from retry_error
        except OSError as e:
            raise CopyFailedError(image.side, e) from e

    def _attempt_copy(self, image: FirmwareImage, drive: Path) -> str:
        target = drive / image.filename
        logger.info("copying_firmware", source=str(image.path), target=str(target))

        try:
            self.copy_file(image.path, target)
        except OSError as e:
            if not is_disconnect_error(e):
                raise
            logger.info(
                "drive_disconnected_during_copy",
                side=image.side.value,
                errno=e.errno,
            )
            self.console.print_success(
                f"{format_side(image.side)} side firmware likely deployed successfully "
                "(drive disconnected during copy)"
            )
            return image.filename

        self.console.print_success(f"{format_side(image.side)} side firmware deployed!")
        return image.filename
