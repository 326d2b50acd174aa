"""Core test fixtures for the zmk-deploy project."""

import logging
import os
from collections.abc import Callable, Generator
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest
import structlog
from rich.console import Console
from typer.testing import CliRunner

from zmkdeploy.cli.helpers.theme import DEPLOY_THEME, ThemedConsole
from zmkdeploy.config.settings import DeploySettings
from zmkdeploy.models.artifact import Artifact, ArtifactWorkflowRun, CommitInfo
from zmkdeploy.protocols import ArtifactProviderProtocol


START_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


# ---- Base Fixtures ----


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def record_console() -> ThemedConsole:
    """Themed console that records output instead of writing to a terminal."""
    console = Console(
        theme=DEPLOY_THEME,
        record=True,
        width=200,
        force_terminal=False,
        color_system=None,
    )
    return ThemedConsole(icon_mode="text", console=console)


@pytest.fixture
def console_text(record_console: ThemedConsole) -> Callable[[], str]:
    """Return a callable exporting everything printed so far as plain text."""

    def _text() -> str:
        return record_console.console.export_text(clear=False)

    return _text


@pytest.fixture
def mock_provider() -> Mock:
    """Create a mock artifact provider."""
    provider = Mock(spec=ArtifactProviderProtocol)
    provider.repo_url = "https://github.com/octo/zmk-config"
    return provider


# ---- Model Factories ----


@pytest.fixture
def start_time() -> datetime:
    """Moment a watcher or session is considered to have started."""
    return START_TIME


@pytest.fixture
def artifact_factory() -> Callable[..., Artifact]:
    """Factory building Artifact models with sensible defaults."""

    def _create(
        artifact_id: int = 42,
        created_at: datetime | None = None,
        commit: CommitInfo | None = None,
        **overrides: Any,
    ) -> Artifact:
        return Artifact(
            id=artifact_id,
            name="firmware",
            created_at=created_at or START_TIME,
            workflow_run=ArtifactWorkflowRun(id=7, head_branch="main"),
            commit=commit,
            **overrides,
        )

    return _create


@pytest.fixture
def sample_artifact(artifact_factory: Callable[..., Artifact]) -> Artifact:
    return artifact_factory(
        commit=CommitInfo(sha="abc1234", branch="main", message="Update keymap")
    )


# ---- Test Isolation Fixtures ----


@pytest.fixture
def isolated_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Run a test in an empty directory with no zmk-deploy environment.

    Config lookups in the working directory and XDG directories only see
    the temporary directory.
    """
    for name in ("GITHUB_REPO_URL", "GITHUB_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("ZMK_DEPLOY_"):
            monkeypatch.delenv(name, raising=False)

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.chdir(tmp_path)
    yield tmp_path


@pytest.fixture
def settings_factory(isolated_env: Path) -> Callable[..., DeploySettings]:
    """Factory building DeploySettings without reading any dotenv file."""

    def _create(**overrides: Any) -> DeploySettings:
        values: dict[str, Any] = {
            "github_repo_url": "https://github.com/octo/zmk-config",
            "github_token": "ghp_test",
            "scratch_dir": isolated_env / "scratch",
        }
        values.update(overrides)
        return DeploySettings(_env_file=None, **values)  # type: ignore[call-arg]

    return _create


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Keep logging and structlog configuration from leaking between tests."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()
