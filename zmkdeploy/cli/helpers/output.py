"""Helper functions for CLI output formatting with Rich integration."""

from zmkdeploy.cli.helpers.theme import get_themed_console


def print_error_message(message: str, use_emoji: bool = True) -> None:
    """Print an error message with an X symbol.

    Args:
        message: The message to print
        use_emoji: Whether to use emoji icons (default: True)
    """
    console = get_themed_console(icon_mode="emoji" if use_emoji else "text")
    console.print_error(message)
