"""Firmware image lookup among extracted files."""

from pathlib import Path

from zmkdeploy.core.errors import AmbiguousFirmwareMatchError, FirmwareNotFoundError
from zmkdeploy.core.structlog_logger import get_struct_logger
from zmkdeploy.models.deploy import FirmwareImage, Side


logger = get_struct_logger(__name__)


class FirmwareFileResolver:
    """Pick the firmware file belonging to one keyboard half."""

    def __init__(self, extension: str = ".uf2") -> None:
        self.extension = extension.lower()

    def candidates(
        self, side: Side, directory: Path, files: list[Path] | None = None
    ) -> list[Path]:
        """Firmware files whose name contains the side token.

        Only ``files`` are considered when given, otherwise every entry of
        ``directory``.
        """
        if files is not None:
            entries = sorted(files)
        else:
            try:
                entries = sorted(directory.iterdir())
            except OSError as e:
                logger.debug(
                    "firmware_dir_unreadable", directory=str(directory), error=str(e)
                )
                return []

        return [
            entry
            for entry in entries
            if entry.is_file()
            and entry.name.lower().endswith(self.extension)
            and side.token in entry.name.lower()
        ]

    def resolve(
        self, side: Side, directory: Path, files: list[Path] | None = None
    ) -> FirmwareImage:
        """Return the single firmware image for ``side``.

        Args:
            side: Keyboard half to resolve
            directory: Directory the firmware was extracted to
            files: Files produced by the extraction; restricts the search so
                leftovers from earlier sessions are never picked up

        Raises:
            FirmwareNotFoundError: If no file matches
            AmbiguousFirmwareMatchError: If more than one file matches
        """
        matches = self.candidates(side, directory, files)

        if not matches:
            raise FirmwareNotFoundError(side, directory)
        if len(matches) > 1:
            raise AmbiguousFirmwareMatchError(side, matches)

        logger.debug("firmware_resolved", side=side.value, path=str(matches[0]))
        return FirmwareImage(side=side, path=matches[0])
