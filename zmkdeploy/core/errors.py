"""Error hierarchy for zmk-deploy.

Every error raised by a deployment session derives from ``DeployError`` so the
CLI and the watcher can report it and carry on. Transport errors raised by
``requests`` are not wrapped.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from zmkdeploy.models.deploy import Side


class DeployError(Exception):
    """Base error for all zmk-deploy failures."""


class ConfigError(DeployError):
    """Missing or invalid configuration."""


class PlatformUnsupportedError(DeployError):
    """No removable-media mount root is known for the running OS."""

    def __init__(self, platform: str) -> None:
        self.platform = platform
        super().__init__(f"Unsupported platform: {platform}")


class FirmwareNotFoundError(DeployError):
    """No firmware image for a side exists in the scratch directory."""

    def __init__(self, side: "Side", directory: Path) -> None:
        self.side = side
        self.directory = directory
        super().__init__(f"Could not find {side.value} firmware file in {directory}")


class AmbiguousFirmwareMatchError(DeployError):
    """More than one firmware image matches a side."""

    def __init__(self, side: "Side", candidates: list[Path]) -> None:
        self.side = side
        self.candidates = candidates
        names = ", ".join(candidate.name for candidate in candidates)
        super().__init__(
            f"Found {len(candidates)} {side.value} firmware files, expected one: {names}"
        )


class CopyFailedError(DeployError):
    """Copying a firmware image onto a bootloader volume failed."""

    def __init__(self, side: "Side", cause: BaseException) -> None:
        self.side = side
        self.cause = cause
        super().__init__(f"Failed to copy firmware to {side.value} side: {cause}")


class ArtifactUnavailableError(DeployError):
    """The CI provider has no successfully built artifact to deploy."""


class ExtractionError(DeployError):
    """A downloaded artifact could not be extracted."""


class GitHubAPIError(DeployError):
    """The GitHub API answered with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: Any = None,
    ) -> None:
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(message)


__all__ = [
    "AmbiguousFirmwareMatchError",
    "ArtifactUnavailableError",
    "ConfigError",
    "CopyFailedError",
    "DeployError",
    "ExtractionError",
    "FirmwareNotFoundError",
    "GitHubAPIError",
    "PlatformUnsupportedError",
]
