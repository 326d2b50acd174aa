"""Watch mode: poll GitHub Actions and redeploy when a new build lands."""

import threading
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum

import requests
from rich.markup import escape

from zmkdeploy.cli.helpers.theme import (
    ThemedConsole,
    format_commit,
    format_repo_url,
    get_themed_console,
)
from zmkdeploy.core.errors import ArtifactUnavailableError, DeployError
from zmkdeploy.core.structlog_logger import StructlogMixin
from zmkdeploy.firmware.sequencer import DeploymentSequencer
from zmkdeploy.models.artifact import Artifact, WorkflowRun
from zmkdeploy.protocols.artifact_provider_protocol import ArtifactProviderProtocol


@dataclass(frozen=True)
class WatcherState:
    """State carried from one poll tick to the next."""

    last_artifact_id: int | None = None
    last_reported_workflow_id: int | None = None
    busy: bool = False


class BuildCheckKind(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class BuildCheck:
    """Outcome of one check for new firmware."""

    kind: BuildCheckKind
    workflow: WorkflowRun | None = None
    artifact: Artifact | None = None


class FirmwareWatcher(StructlogMixin):
    """Poll for new firmware builds and deploy each one once.

    Only builds started after the watcher was created are considered. A tick
    that finds the state busy does nothing, so a deployment is never started
    while another one is running.
    """

    def __init__(
        self,
        provider: ArtifactProviderProtocol,
        sequencer: DeploymentSequencer,
        start_time: datetime | None = None,
        console: ThemedConsole | None = None,
        poll_interval: float = 10.0,
    ) -> None:
        super().__init__()
        self.provider = provider
        self.sequencer = sequencer
        self.start_time = start_time or datetime.now(timezone.utc)
        self.console = console or get_themed_console()
        self.poll_interval = poll_interval

    def _is_new(self, created_at: datetime | None) -> bool:
        return created_at is not None and created_at > self.start_time

    def check_for_new_firmware(self, state: WatcherState) -> BuildCheck | None:
        """Look for a running build first, then for a finished artifact."""
        running = self.provider.get_latest_workflow_run(status="in_progress")
        if (
            running is not None
            and self._is_new(running.created_at)
            and running.id != state.last_reported_workflow_id
        ):
            return BuildCheck(kind=BuildCheckKind.IN_PROGRESS, workflow=running)

        try:
            artifact = self.provider.get_latest_artifact()
        except ArtifactUnavailableError as e:
            self.logger.debug("no_deployable_artifact", reason=str(e))
            return None

        if self._is_new(artifact.created_at):
            return BuildCheck(kind=BuildCheckKind.COMPLETED, artifact=artifact)
        return None

    def poll_tick(self, state: WatcherState) -> WatcherState:
        """Run one poll and return the updated state. Never raises."""
        if state.busy:
            self.logger.debug("poll_skipped_busy")
            return state

        try:
            result = self.check_for_new_firmware(state)
        except Exception as e:
            self.log_error_with_context("update_check_failed", e)
            self.console.print_error(f"Error checking for updates: {escape(str(e))}")
            return state

        if result is None:
            return state

        if result.kind is BuildCheckKind.IN_PROGRESS and result.workflow is not None:
            self.console.print(
                f"Build in progress for commit {format_commit(result.workflow.commit)}"
            )
            return replace(state, last_reported_workflow_id=result.workflow.id)

        artifact = result.artifact
        if artifact is None or artifact.id == state.last_artifact_id:
            return state

        if artifact.commit is not None:
            self.console.print(
                f"New firmware build detected from commit {format_commit(artifact.commit)}"
            )
        state = replace(state, last_artifact_id=artifact.id, busy=True)
        try:
            self.sequencer.deploy(artifact)
        except (DeployError, requests.RequestException) as e:
            self.console.print_error(f"Error: {escape(str(e))}")
        except Exception as e:
            self.log_error_with_context("unexpected_deployment_error", e)
            self.console.print_error(f"Error: {escape(str(e))}")
        finally:
            state = replace(state, busy=False)

        self.console.print()
        self.console.print(self._watching_message())
        return state

    def _watching_message(self) -> str:
        return f"Watching for new firmware builds from {format_repo_url(self.provider.repo_url)}..."

    def run(self, stop_event: threading.Event | None = None) -> WatcherState:
        """Poll every ``poll_interval`` seconds until ``stop_event`` is set."""
        stop_event = stop_event or threading.Event()
        state = WatcherState()

        self.console.print(self._watching_message())
        self.logger.info("watch_started", poll_interval=self.poll_interval)

        while not stop_event.wait(self.poll_interval):
            state = self.poll_tick(state)

        self.logger.info("watch_stopped")
        return state
