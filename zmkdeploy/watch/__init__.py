"""Watch mode for automatic redeployment."""

from .watcher import BuildCheck, BuildCheckKind, FirmwareWatcher, WatcherState


__all__ = ["BuildCheck", "BuildCheckKind", "FirmwareWatcher", "WatcherState"]
