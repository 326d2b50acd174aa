"""Two-phase (left, then right) firmware deployment."""

from collections.abc import Callable
from pathlib import Path

import requests

from zmkdeploy.cli.helpers.theme import (
    ThemedConsole,
    format_commit,
    format_side,
    get_themed_console,
)
from zmkdeploy.core.errors import DeployError
from zmkdeploy.core.structlog_logger import StructlogMixin
from zmkdeploy.firmware.archive import extract_archive
from zmkdeploy.firmware.copier import FirmwareCopier
from zmkdeploy.firmware.drive_waiter import DriveAwaiter
from zmkdeploy.firmware.resolver import FirmwareFileResolver
from zmkdeploy.firmware.volumes import VolumeLocator
from zmkdeploy.models.artifact import Artifact
from zmkdeploy.models.deploy import DeploymentSession, DeployResult, FirmwareImage, Side
from zmkdeploy.protocols.artifact_provider_protocol import ArtifactProviderProtocol


class DeploymentSequencer(StructlogMixin):
    """Download an artifact and flash both keyboard halves one after the other.

    The left half may already be in bootloader mode when the session starts.
    The right half must mount after the left volume has gone away. Scratch
    files are only removed when both halves were flashed, so a failed session
    can be inspected or retried by hand.
    """

    def __init__(
        self,
        provider: ArtifactProviderProtocol,
        locator: VolumeLocator,
        awaiter: DriveAwaiter,
        resolver: FirmwareFileResolver,
        copier: FirmwareCopier,
        scratch_dir: Path,
        console: ThemedConsole | None = None,
        extract: Callable[[Path, Path], list[Path]] = extract_archive,
    ) -> None:
        super().__init__()
        self.provider = provider
        self.locator = locator
        self.awaiter = awaiter
        self.resolver = resolver
        self.copier = copier
        self.scratch_dir = scratch_dir
        self.console = console or get_themed_console()
        self.extract = extract

    def deploy(self, artifact: Artifact | None = None) -> DeployResult:
        """Deploy ``artifact``, or the latest successful one when omitted.

        Raises:
            DeployError: If any step fails; the session is aborted
            requests.RequestException: On network failures
        """
        try:
            return self._deploy(artifact)
        except (DeployError, requests.RequestException) as e:
            self.log_error_with_context("deployment_failed", e)
            raise

    def _deploy(self, artifact: Artifact | None) -> DeployResult:
        if artifact is None:
            self.console.print("Fetching latest firmware artifact...")
            artifact = self.provider.get_latest_artifact()

        session = DeploymentSession(artifact=artifact)
        if artifact.commit is not None:
            self.console.print(
                f"Found firmware from commit {format_commit(artifact.commit)}"
            )

        self.console.print("Downloading firmware...")
        session.archive_path = self.provider.download_artifact(artifact)

        self.console.print("Extracting firmware...")
        extracted = self.extract(session.archive_path, self.scratch_dir)

        if self.locator.locate() is not None:
            session.left_premounted = True
            self.console.print_warning(
                "Found an already mounted drive - assuming this is the "
                f"{format_side(Side.LEFT)} side"
            )

        self.logger.info(
            "deployment_started",
            artifact_id=artifact.id,
            left_premounted=session.left_premounted,
        )

        session.left_firmware, left_name = self._deploy_side(
            Side.LEFT, fresh=False, files=extracted
        )
        session.right_firmware, right_name = self._deploy_side(
            Side.RIGHT, fresh=True, files=extracted
        )

        removed = self._cleanup(session)

        self.console.print()
        self.console.print_success("Deployment complete!")
        self.logger.info("deployment_complete", artifact_id=artifact.id)

        result = DeployResult(
            success=True,
            artifact_id=artifact.id,
            deployed_files={Side.LEFT.value: left_name, Side.RIGHT.value: right_name},
            removed_files=removed,
        )
        result.add_message(f"Deployed artifact {artifact.id} to both halves")
        return result

    def _deploy_side(
        self, side: Side, fresh: bool, files: list[Path]
    ) -> tuple[FirmwareImage, str]:
        drive = self.awaiter.wait_for_drive(side, fresh=fresh)
        image = self.resolver.resolve(side, self.scratch_dir, files=files)
        filename = self.copier.copy(image, drive)
        return image, filename

    def _cleanup(self, session: DeploymentSession) -> list[Path]:
        removed: list[Path] = []
        for path in session.scratch_files():
            try:
                path.unlink()
            except OSError as e:
                self.logger.warning("scratch_cleanup_failed", path=str(path), error=str(e))
            else:
                removed.append(path)
        return removed
