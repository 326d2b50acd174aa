"""Protocol for the CI provider that builds firmware artifacts."""

from pathlib import Path
from typing import Protocol, runtime_checkable

from zmkdeploy.models.artifact import Artifact, WorkflowRun


@runtime_checkable
class ArtifactProviderProtocol(Protocol):
    """Source of firmware build artifacts."""

    repo_url: str

    def get_latest_artifact(self) -> Artifact:
        """Newest artifact whose workflow run completed successfully."""
        ...

    def get_workflow_run(self, run_id: int) -> WorkflowRun:
        """Workflow run by id."""
        ...

    def get_latest_workflow_run(self, status: str = "in_progress") -> WorkflowRun | None:
        """Newest workflow run with the given status, if any."""
        ...

    def download_artifact(self, artifact: Artifact) -> Path:
        """Download the artifact archive and return its local path."""
        ...
