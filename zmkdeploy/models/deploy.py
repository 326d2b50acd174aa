"""Models describing a two-sided firmware deployment."""

from enum import Enum
from pathlib import Path

from pydantic import Field

from zmkdeploy.models.artifact import Artifact
from zmkdeploy.models.base import DeployBaseModel
from zmkdeploy.models.results import BaseResult


class Side(str, Enum):
    """One half of a split keyboard."""

    LEFT = "left"
    RIGHT = "right"

    @property
    def token(self) -> str:
        """Substring identifying this side in firmware filenames."""
        return self.value

    @property
    def label(self) -> str:
        return self.value.capitalize()


class FirmwareImage(DeployBaseModel):
    """A firmware file extracted from an artifact for one side."""

    side: Side
    path: Path

    @property
    def filename(self) -> str:
        return self.path.name


class DeploymentSession(DeployBaseModel):
    """State of one left+right deployment attempt."""

    artifact: Artifact
    archive_path: Path | None = None
    left_premounted: bool = False
    left_firmware: FirmwareImage | None = None
    right_firmware: FirmwareImage | None = None

    def scratch_files(self) -> list[Path]:
        """Files to delete once both halves are flashed."""
        files: list[Path] = []
        if self.archive_path is not None:
            files.append(self.archive_path)
        for image in (self.left_firmware, self.right_firmware):
            if image is not None:
                files.append(image.path)
        return files


class DeployResult(BaseResult):
    """Result of a completed deployment."""

    artifact_id: int | None = None
    deployed_files: dict[str, str] = Field(
        default_factory=dict, description="Confirmed filename per side"
    )
    removed_files: list[Path] = Field(default_factory=list)


__all__ = ["DeployResult", "DeploymentSession", "FirmwareImage", "Side"]
