"""Removable volume lookup for bootloader drives."""

import getpass
import os
import sys
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from zmkdeploy.core.errors import PlatformUnsupportedError
from zmkdeploy.core.structlog_logger import get_struct_logger


if TYPE_CHECKING:
    from zmkdeploy.config.settings import DeploySettings


logger = get_struct_logger(__name__)

MountRootRule = Callable[[Mapping[str, str]], Path]


def _linux_mount_root(environ: Mapping[str, str]) -> Path:
    user = environ.get("USER") or getpass.getuser()
    return Path("/media") / user


def _darwin_mount_root(environ: Mapping[str, str]) -> Path:
    return Path("/Volumes")


# Keyed by sys.platform
MOUNT_ROOT_RULES: dict[str, MountRootRule] = {
    "linux": _linux_mount_root,
    "darwin": _darwin_mount_root,
}


class VolumeLocator:
    """Find a mounted bootloader volume by name.

    The result is never cached: every call lists the mount root again.
    """

    def __init__(
        self,
        volume_marker: str = "nicenano",
        mount_root: Path | None = None,
        platform: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the locator.

        Args:
            volume_marker: Case-insensitive substring of the volume name
            mount_root: Explicit mount root, bypasses the platform table
            platform: OS identifier, defaults to ``sys.platform``
            environ: Environment used to build per-user paths
        """
        self.volume_marker = volume_marker.lower()
        self._mount_root = mount_root
        self.platform = platform or sys.platform
        self._environ = environ if environ is not None else os.environ

    def mount_root(self) -> Path:
        """Directory whose entries are the currently mounted volumes.

        Raises:
            PlatformUnsupportedError: If the platform has no mount root rule
        """
        if self._mount_root is not None:
            return self._mount_root

        rule = MOUNT_ROOT_RULES.get(self.platform)
        if rule is None:
            raise PlatformUnsupportedError(self.platform)
        return rule(self._environ)

    def locate(self) -> Path | None:
        """Return the bootloader volume path, or None if none is mounted."""
        root = self.mount_root()

        try:
            names = sorted(entry.name for entry in root.iterdir())
        except OSError as e:
            logger.debug("mount_root_unavailable", mount_root=str(root), error=str(e))
            return None

        for name in names:
            if self.volume_marker in name.lower():
                return (root / name).resolve()

        return None


def create_volume_locator(settings: "DeploySettings") -> VolumeLocator:
    """Factory function to create a VolumeLocator from settings."""
    return VolumeLocator(
        volume_marker=settings.volume_marker,
        mount_root=settings.mount_root,
    )
