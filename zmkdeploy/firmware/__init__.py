"""Firmware deployment domain: volume detection, waiting, copying, sequencing."""

from typing import TYPE_CHECKING

from .archive import extract_archive
from .copier import FirmwareCopier
from .drive_waiter import DriveAwaiter
from .resolver import FirmwareFileResolver
from .sequencer import DeploymentSequencer
from .volumes import VolumeLocator, create_volume_locator
from .wait_state import DriveWaitState, WaitPhase


if TYPE_CHECKING:
    from zmkdeploy.cli.helpers.theme import ThemedConsole
    from zmkdeploy.config.settings import DeploySettings
    from zmkdeploy.protocols import ArtifactProviderProtocol, WaitProgressProtocol


def create_deployment_sequencer(
    settings: "DeploySettings",
    provider: "ArtifactProviderProtocol",
    console: "ThemedConsole | None" = None,
    progress: "WaitProgressProtocol | None" = None,
) -> DeploymentSequencer:
    """Factory function wiring a DeploymentSequencer from settings."""
    locator = create_volume_locator(settings)
    awaiter = DriveAwaiter(
        locator,
        progress=progress,
        console=console,
        poll_interval=settings.drive_poll_interval,
    )
    copier = FirmwareCopier(console=console, retry_delay=settings.permission_retry_delay)
    return DeploymentSequencer(
        provider=provider,
        locator=locator,
        awaiter=awaiter,
        resolver=FirmwareFileResolver(extension=settings.firmware_extension),
        copier=copier,
        scratch_dir=settings.scratch_dir,
        console=console,
    )


__all__ = [
    "DeploymentSequencer",
    "DriveAwaiter",
    "DriveWaitState",
    "FirmwareCopier",
    "FirmwareFileResolver",
    "VolumeLocator",
    "WaitPhase",
    "create_deployment_sequencer",
    "create_volume_locator",
    "extract_archive",
]
