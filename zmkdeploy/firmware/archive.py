"""Artifact archive extraction."""

import zipfile
from pathlib import Path

from zmkdeploy.core.errors import ExtractionError
from zmkdeploy.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)


def extract_archive(zip_path: Path, target_dir: Path) -> list[Path]:
    """Extract every member of ``zip_path`` into ``target_dir``.

    Existing files with the same name are overwritten.

    Returns:
        Paths of the extracted files

    Raises:
        ExtractionError: If the archive is missing, corrupt or cannot be written
    """
    target_dir.mkdir(parents=True, exist_ok=True)

    try:
        with zipfile.ZipFile(zip_path) as archive:
            members = [info for info in archive.infolist() if not info.is_dir()]
            archive.extractall(target_dir)
    except (zipfile.BadZipFile, OSError) as e:
        raise ExtractionError(f"Failed to extract firmware: {e}") from e

    extracted = [target_dir / member.filename for member in members]
    logger.debug(
        "archive_extracted",
        archive=str(zip_path),
        target_dir=str(target_dir),
        files=[path.name for path in extracted],
    )
    return extracted
