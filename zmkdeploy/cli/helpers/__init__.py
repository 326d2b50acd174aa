"""Helper functions for CLI output."""

from .output import print_error_message
from .theme import (
    Colors,
    Icons,
    ThemedConsole,
    format_commit,
    format_repo_url,
    format_side,
    get_themed_console,
)


__all__ = [
    "Colors",
    "Icons",
    "ThemedConsole",
    "format_commit",
    "format_repo_url",
    "format_side",
    "get_themed_console",
    "print_error_message",
]
