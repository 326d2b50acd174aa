"""Unified theme system for consistent Rich styling across CLI output."""

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

from zmkdeploy.models.artifact import CommitInfo
from zmkdeploy.models.deploy import Side


# Color scheme constants
class Colors:
    """Standardized color palette for CLI output."""

    # Status colors
    SUCCESS = "bold green"
    ERROR = "bold red"
    WARNING = "bold yellow"

    # UI element colors
    PRIMARY = "cyan"
    MUTED = "dim"

    # Keyboard halves
    LEFT = "bold bright_blue"
    RIGHT = "bold bright_magenta"

    # Commit details
    SHA = "bold"
    BRANCH = "green"
    MESSAGE = "dim"


class Icons:
    """Standardized icons for different message types."""

    SUCCESS = "✅"
    ERROR = "❌"
    WARNING = "⚠️"

    _TEXT_FALLBACKS = {
        "SUCCESS": "✓",
        "ERROR": "✗",
        "WARNING": "!",
    }

    @classmethod
    def get_icon(cls, icon_name: str, icon_mode: str = "emoji") -> str:
        """Get icon based on the specified mode.

        Args:
            icon_name: Name of the icon (e.g., "SUCCESS", "ERROR")
            icon_mode: Icon mode - "emoji" or "text"

        Returns:
            The appropriate icon based on mode
        """
        if icon_mode == "emoji":
            return str(getattr(cls, icon_name, ""))
        return cls._TEXT_FALLBACKS.get(icon_name, f"[{icon_name}]")


DEPLOY_THEME = Theme(
    {
        "success": Colors.SUCCESS,
        "error": Colors.ERROR,
        "warning": Colors.WARNING,
        "primary": Colors.PRIMARY,
        "muted": Colors.MUTED,
        "side.left": Colors.LEFT,
        "side.right": Colors.RIGHT,
        "commit.sha": Colors.SHA,
        "commit.branch": Colors.BRANCH,
        "commit.message": Colors.MESSAGE,
    }
)


class ThemedConsole:
    """Console wrapper with the zmk-deploy theme applied."""

    def __init__(self, icon_mode: str = "emoji", console: Console | None = None) -> None:
        """Initialize themed console.

        Args:
            icon_mode: Icon mode - "emoji" or "text"
            console: Console to print to, a themed stdout console by default
        """
        self.console = console or Console(theme=DEPLOY_THEME, highlight=False)
        self.icon_mode = icon_mode

    def print(self, message: str = "") -> None:
        self.console.print(message)

    def print_success(self, message: str) -> None:
        """Print success message with icon and styling."""
        icon = Icons.get_icon("SUCCESS", self.icon_mode)
        self.console.print(f"{icon} {message}", style="success")

    def print_error(self, message: str) -> None:
        """Print error message with icon and styling."""
        icon = Icons.get_icon("ERROR", self.icon_mode)
        self.console.print(f"{icon} {message}", style="error")

    def print_warning(self, message: str) -> None:
        """Print warning message with icon and styling."""
        icon = Icons.get_icon("WARNING", self.icon_mode)
        self.console.print(f"{icon} {message}", style="warning")


def format_side(side: Side) -> str:
    """Side label colored per keyboard half."""
    return f"[side.{side.value}]{side.label}[/side.{side.value}]"


def format_commit(commit: CommitInfo) -> str:
    """Render ``sha (branch) "message"`` with the commit styles."""
    message = escape(commit.message.splitlines()[0] if commit.message else "")
    return (
        f"[commit.sha]{escape(commit.sha)}[/commit.sha] "
        f"([commit.branch]{escape(commit.branch)}[/commit.branch]) "
        f'"[commit.message]{message}[/commit.message]"'
    )


def format_repo_url(url: str) -> str:
    return f"[muted]{escape(url)}[/muted]"


def get_themed_console(icon_mode: str = "emoji") -> ThemedConsole:
    """Get a themed console instance.

    Args:
        icon_mode: Icon mode - "emoji" or "text"

    Returns:
        Configured ThemedConsole instance
    """
    return ThemedConsole(icon_mode=icon_mode)
