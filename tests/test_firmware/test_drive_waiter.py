"""Tests for waiting on bootloader volumes."""

from pathlib import Path
from unittest.mock import Mock, call

import pytest

from zmkdeploy.firmware.drive_waiter import DriveAwaiter
from zmkdeploy.firmware.volumes import VolumeLocator
from zmkdeploy.models.deploy import Side
from zmkdeploy.protocols import WaitProgressProtocol


DRIVE = Path("/media/user/NICENANO")


@pytest.fixture
def mock_locator() -> Mock:
    return Mock(spec=VolumeLocator)


@pytest.fixture
def mock_progress() -> Mock:
    return Mock(spec=WaitProgressProtocol)


@pytest.fixture
def mock_sleep() -> Mock:
    return Mock()


@pytest.fixture
def awaiter(mock_locator, mock_progress, mock_sleep, record_console) -> DriveAwaiter:
    return DriveAwaiter(
        mock_locator,
        progress=mock_progress,
        console=record_console,
        poll_interval=1.0,
        sleep=mock_sleep,
    )


class TestStandardWait:
    """Test waiting for the left half."""

    def test_returns_already_mounted_volume(
        self, awaiter, mock_locator, mock_progress, mock_sleep, console_text
    ):
        mock_locator.locate.return_value = DRIVE

        assert awaiter.wait_for_drive(Side.LEFT) == DRIVE

        mock_sleep.assert_not_called()
        mock_progress.start.assert_called_once()
        mock_progress.stop.assert_called()
        assert f"Found Left side keyboard at {DRIVE}" in console_text()

    def test_polls_until_volume_appears(
        self, awaiter, mock_locator, mock_sleep
    ):
        mock_locator.locate.side_effect = [None, None, DRIVE]

        assert awaiter.wait_for_drive(Side.LEFT) == DRIVE

        assert mock_locator.locate.call_count == 3
        assert mock_sleep.call_args_list == [call(1.0), call(1.0)]

    def test_spinner_message_names_the_side(self, awaiter, mock_locator, mock_progress):
        mock_locator.locate.return_value = DRIVE

        awaiter.wait_for_drive(Side.LEFT)

        message = mock_progress.start.call_args.args[0]
        assert "double-click the reset button" in message
        assert "Left" in message


class TestFreshWait:
    """Test waiting for the right half after the left volume was used."""

    def test_waits_for_absence_before_accepting(
        self, awaiter, mock_locator, mock_progress, mock_sleep, console_text
    ):
        right_drive = Path("/media/user/NICENANO1")
        mock_locator.locate.side_effect = [DRIVE, DRIVE, None, right_drive]

        assert awaiter.wait_for_drive(Side.RIGHT, fresh=True) == right_drive

        assert mock_locator.locate.call_count == 4
        assert mock_sleep.call_count == 2
        mock_progress.start.assert_called_once()
        assert f"Found Right side keyboard at {right_drive}" in console_text()

    def test_never_accepts_stale_volume(
        self, awaiter, mock_locator, mock_progress, mock_sleep
    ):
        mock_locator.locate.return_value = DRIVE
        mock_sleep.side_effect = [None, None, KeyboardInterrupt()]

        with pytest.raises(KeyboardInterrupt):
            awaiter.wait_for_drive(Side.RIGHT, fresh=True)

        assert mock_locator.locate.call_count == 3
        mock_progress.start.assert_not_called()
        mock_progress.stop.assert_called()

    def test_spinner_stopped_when_interrupted_while_polling(
        self, awaiter, mock_locator, mock_progress, mock_sleep
    ):
        mock_locator.locate.return_value = None
        mock_sleep.side_effect = KeyboardInterrupt()

        with pytest.raises(KeyboardInterrupt):
            awaiter.wait_for_drive(Side.RIGHT, fresh=True)

        mock_progress.start.assert_called_once()
        mock_progress.stop.assert_called_once()


def test_defaults_to_silent_progress(mock_locator, record_console):
    mock_locator.locate.return_value = DRIVE
    awaiter = DriveAwaiter(mock_locator, console=record_console, sleep=Mock())

    assert awaiter.wait_for_drive(Side.LEFT) == DRIVE
