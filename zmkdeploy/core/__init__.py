from .errors import (
    AmbiguousFirmwareMatchError,
    ArtifactUnavailableError,
    ConfigError,
    CopyFailedError,
    DeployError,
    ExtractionError,
    FirmwareNotFoundError,
    GitHubAPIError,
    PlatformUnsupportedError,
)
from .logging import setup_logging


__all__ = [
    "setup_logging",
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
