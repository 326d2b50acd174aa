"""Protocol definitions for zmk-deploy collaborators."""

from .artifact_provider_protocol import ArtifactProviderProtocol
from .progress_protocol import WaitProgressProtocol


__all__ = ["ArtifactProviderProtocol", "WaitProgressProtocol"]
