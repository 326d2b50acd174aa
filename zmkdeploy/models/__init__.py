"""Core data models for zmk-deploy."""

from .artifact import Artifact, ArtifactWorkflowRun, CommitInfo, HeadCommit, WorkflowRun
from .base import DeployBaseModel
from .deploy import DeploymentSession, DeployResult, FirmwareImage, Side
from .results import BaseResult


__all__ = [
    "Artifact",
    "ArtifactWorkflowRun",
    "BaseResult",
    "CommitInfo",
    "DeployBaseModel",
    "DeployResult",
    "DeploymentSession",
    "FirmwareImage",
    "HeadCommit",
    "Side",
    "WorkflowRun",
]
