"""Models for GitHub Actions artifacts and workflow runs."""

from datetime import datetime

from pydantic import Field

from zmkdeploy.models.base import DeployBaseModel


SHORT_SHA_LENGTH = 7


class HeadCommit(DeployBaseModel):
    """Commit that triggered a workflow run."""

    id: str = ""
    message: str = ""


class WorkflowRun(DeployBaseModel):
    """A GitHub Actions workflow run."""

    id: int
    name: str | None = None
    status: str | None = None
    conclusion: str | None = None
    head_sha: str = ""
    head_branch: str | None = None
    head_commit: HeadCommit | None = None
    created_at: datetime | None = None

    @property
    def is_successful(self) -> bool:
        """Whether the run finished and produced a usable artifact."""
        return self.status == "completed" and self.conclusion == "success"

    @property
    def commit(self) -> "CommitInfo":
        """Commit metadata used when reporting this run."""
        return CommitInfo(
            sha=self.head_sha[:SHORT_SHA_LENGTH],
            branch=self.head_branch or "",
            message=self.head_commit.message if self.head_commit else "",
        )


class ArtifactWorkflowRun(DeployBaseModel):
    """Workflow run reference embedded in an artifact listing."""

    id: int
    head_branch: str | None = None
    head_sha: str | None = None


class CommitInfo(DeployBaseModel):
    """Short commit description shown to the user."""

    sha: str
    branch: str = ""
    message: str = ""


class Artifact(DeployBaseModel):
    """A build artifact (zip archive) produced by a workflow run."""

    id: int
    name: str = ""
    created_at: datetime
    size_in_bytes: int | None = None
    expired: bool = False
    workflow_run: ArtifactWorkflowRun | None = None
    commit: CommitInfo | None = Field(
        default=None, description="Filled in from the workflow run"
    )

    @property
    def workflow_run_id(self) -> int | None:
        return self.workflow_run.id if self.workflow_run else None


__all__ = [
    "Artifact",
    "ArtifactWorkflowRun",
    "CommitInfo",
    "HeadCommit",
    "WorkflowRun",
]
