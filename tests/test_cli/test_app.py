"""Tests for the zmk-deploy command line."""

import logging
from collections.abc import Generator
from unittest.mock import Mock, patch

import pytest
import requests

from zmkdeploy.cli.app import __version__, app, main, resolve_log_level
from zmkdeploy.core.errors import CopyFailedError
from zmkdeploy.models.deploy import Side


@pytest.fixture
def configured_env(isolated_env, monkeypatch):
    monkeypatch.setenv("GITHUB_REPO_URL", "https://github.com/octo/zmk-config")
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
    return isolated_env


@pytest.fixture
def mock_sequencer() -> Mock:
    return Mock()


@pytest.fixture
def patched_app(configured_env, mock_sequencer) -> Generator[dict[str, Mock], None, None]:
    """Patch the services the command wires together."""
    with (
        patch("zmkdeploy.cli.app.setup_logging") as mock_setup_logging,
        patch("zmkdeploy.cli.app.create_github_client") as mock_create_client,
        patch(
            "zmkdeploy.cli.app.create_deployment_sequencer",
            return_value=mock_sequencer,
        ) as mock_create_sequencer,
        patch("zmkdeploy.cli.app.FirmwareWatcher") as mock_watcher_cls,
    ):
        yield {
            "setup_logging": mock_setup_logging,
            "create_client": mock_create_client,
            "create_sequencer": mock_create_sequencer,
            "watcher_cls": mock_watcher_cls,
        }


class TestDeployCommand:
    """Test one-shot deployment."""

    def test_deploys_once(self, cli_runner, patched_app, mock_sequencer):
        result = cli_runner.invoke(app, [])

        assert result.exit_code == 0
        mock_sequencer.deploy.assert_called_once_with()
        patched_app["watcher_cls"].assert_not_called()

    def test_wires_provider_into_sequencer(self, cli_runner, patched_app):
        cli_runner.invoke(app, [])

        provider = patched_app["create_client"].return_value
        args, kwargs = patched_app["create_sequencer"].call_args
        assert args[1] is provider
        assert kwargs["console"].icon_mode == "emoji"
        assert kwargs["progress"] is not None

    def test_no_emoji_uses_text_icons(self, cli_runner, patched_app):
        cli_runner.invoke(app, ["--no-emoji"])

        _args, kwargs = patched_app["create_sequencer"].call_args
        assert kwargs["console"].icon_mode == "text"

    def test_deploy_error_exits_with_failure(
        self, cli_runner, patched_app, mock_sequencer
    ):
        mock_sequencer.deploy.side_effect = CopyFailedError(
            Side.RIGHT, OSError("No space left")
        )

        result = cli_runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Failed to copy firmware to right side" in result.output

    def test_no_emoji_applies_to_error_messages(
        self, cli_runner, patched_app, mock_sequencer
    ):
        mock_sequencer.deploy.side_effect = CopyFailedError(
            Side.LEFT, OSError("No space left")
        )

        result = cli_runner.invoke(app, ["--no-emoji"])

        assert result.exit_code == 1
        assert "✗ Error: Failed to copy firmware to left side" in result.output
        assert "❌" not in result.output

    def test_network_error_exits_with_failure(
        self, cli_runner, patched_app, mock_sequencer
    ):
        mock_sequencer.deploy.side_effect = requests.ConnectionError("unreachable")

        result = cli_runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Network error: unreachable" in result.output

    def test_interrupt_exits_130(self, cli_runner, patched_app, mock_sequencer):
        mock_sequencer.deploy.side_effect = KeyboardInterrupt()

        result = cli_runner.invoke(app, [])

        assert result.exit_code == 130
        assert "Deployment interrupted" in result.output


class TestWatchCommand:
    """Test watch mode."""

    def test_runs_watcher(self, cli_runner, patched_app, mock_sequencer):
        result = cli_runner.invoke(app, ["--watch"])

        assert result.exit_code == 0
        watcher_cls = patched_app["watcher_cls"]
        watcher_cls.assert_called_once()
        assert watcher_cls.call_args.kwargs["poll_interval"] == 10.0
        watcher_cls.return_value.run.assert_called_once_with()
        mock_sequencer.deploy.assert_not_called()

    def test_interrupt_stops_cleanly(self, cli_runner, patched_app):
        patched_app["watcher_cls"].return_value.run.side_effect = KeyboardInterrupt()

        result = cli_runner.invoke(app, ["--watch"])

        assert result.exit_code == 0
        assert "Stopped watching for firmware builds" in result.output


class TestConfigurationErrors:
    """Test failures before any deployment starts."""

    def test_missing_token(self, cli_runner, isolated_env, monkeypatch):
        monkeypatch.setenv("GITHUB_REPO_URL", "https://github.com/octo/zmk-config")

        with patch("zmkdeploy.cli.app.setup_logging"):
            result = cli_runner.invoke(app, [])

        assert result.exit_code == 1
        assert "GITHUB_TOKEN is not set" in result.output

    def test_missing_config_file(self, cli_runner, isolated_env):
        result = cli_runner.invoke(app, ["--config", "missing.yaml"])

        assert result.exit_code == 1
        assert "Config file not found" in result.output


class TestGlobalOptions:
    """Test ambient options."""

    def test_version(self, cli_runner):
        result = cli_runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"zmk-deploy v{__version__}" in result.output

    def test_help_mentions_watch(self, cli_runner):
        result = cli_runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "--watch" in result.output

    @pytest.mark.parametrize(
        "args, expected",
        [
            ([], logging.WARNING),
            (["-v"], logging.INFO),
            (["-vv"], logging.DEBUG),
            (["--debug"], logging.DEBUG),
        ],
    )
    def test_log_level_flags(self, cli_runner, patched_app, args, expected):
        cli_runner.invoke(app, args)

        assert patched_app["setup_logging"].call_args.kwargs["level"] == expected

    def test_log_file_forwarded(self, cli_runner, patched_app, tmp_path):
        log_file = str(tmp_path / "deploy.log")

        cli_runner.invoke(app, ["--log-file", log_file])

        assert patched_app["setup_logging"].call_args.kwargs["log_file"] == log_file

    def test_settings_loading_does_not_log_at_default_verbosity(
        self, cli_runner, configured_env, mock_sequencer
    ):
        with (
            patch("zmkdeploy.cli.app.create_github_client"),
            patch(
                "zmkdeploy.cli.app.create_deployment_sequencer",
                return_value=mock_sequencer,
            ),
        ):
            result = cli_runner.invoke(app, [])

        assert result.exit_code == 0
        assert "no_config_file_found" not in result.output
        assert "[debug" not in result.output

    def test_logging_is_configured_before_settings_load(
        self, cli_runner, patched_app, settings_factory
    ):
        setup_logging = patched_app["setup_logging"]
        calls_before_load = []

        def _load(path):
            calls_before_load.append(setup_logging.call_count)
            return settings_factory()

        with patch("zmkdeploy.cli.app.load_settings", side_effect=_load):
            result = cli_runner.invoke(app, ["-vv"])

        assert result.exit_code == 0
        assert calls_before_load == [1]
        assert setup_logging.call_args_list[0].kwargs["level"] == logging.DEBUG


@pytest.mark.parametrize(
    "verbose, debug, configured, expected",
    [
        (0, False, logging.ERROR, logging.ERROR),
        (1, False, logging.ERROR, logging.INFO),
        (2, False, logging.ERROR, logging.DEBUG),
        (0, True, logging.ERROR, logging.DEBUG),
    ],
)
def test_resolve_log_level(verbose, debug, configured, expected):
    assert resolve_log_level(verbose, debug, configured) == expected


def test_main_returns_exit_code(monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["zmk-deploy", "--version"])

    assert main() == 0
    assert "zmk-deploy v" in capsys.readouterr().out
