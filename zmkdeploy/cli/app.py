"""Main CLI application for zmk-deploy."""

import logging
import sys

# Import version from package metadata directly to avoid circular imports
from importlib.metadata import distribution
from typing import Annotated

import typer

from zmkdeploy.cli.decorators.error_handling import (
    handle_errors,
    print_stack_trace_if_verbose,
)
from zmkdeploy.cli.helpers.theme import get_themed_console
from zmkdeploy.cli.progress import create_progress_display
from zmkdeploy.config import load_settings
from zmkdeploy.core.logging import setup_logging
from zmkdeploy.firmware import create_deployment_sequencer
from zmkdeploy.github import create_github_client
from zmkdeploy.watch import FirmwareWatcher


__all__ = ["app", "main", "__version__"]


__version__ = distribution("zmk-deploy").version

logger = logging.getLogger(__name__)

INTERRUPTED_EXIT_CODE = 130


def resolve_log_level(verbose: int, debug: bool, configured: int) -> int:
    """Log level from CLI flags, falling back to the configured level."""
    if debug or verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return configured


app = typer.Typer(
    name="zmk-deploy",
    help=f"""zmk-deploy v{__version__}

Download the latest ZMK firmware built by GitHub Actions and flash it onto
both halves of a split keyboard, left side first.

Common workflows:
  • Deploy once:        zmk-deploy
  • Deploy every build: zmk-deploy --watch""",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
@handle_errors
def deploy(
    watch: Annotated[
        bool,
        typer.Option(
            "--watch",
            help="Keep polling GitHub and deploy every new firmware build",
        ),
    ] = False,
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity (-v=INFO, -vv=DEBUG)",
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging (equivalent to -vv)"),
    ] = False,
    log_file: Annotated[
        str | None, typer.Option("--log-file", help="Log to file")
    ] = None,
    config_file: Annotated[
        str | None,
        typer.Option("-c", "--config", help="Path to configuration file"),
    ] = None,
    no_emoji: Annotated[
        bool,
        typer.Option("--no-emoji", help="Disable emoji icons in output"),
    ] = False,
    version: Annotated[
        bool, typer.Option("--version", help="Show version and exit")
    ] = False,
) -> None:
    """Deploy the latest firmware build to both keyboard halves."""
    if version:
        print(f"zmk-deploy v{__version__}")
        raise typer.Exit()

    # Settings loading logs too, so route it to stderr before the configured
    # level is known.
    setup_logging(
        level=resolve_log_level(verbose, debug, logging.WARNING), log_file=log_file
    )
    settings = load_settings(config_file)
    setup_logging(
        level=resolve_log_level(verbose, debug, settings.get_log_level_int()),
        log_file=log_file,
    )

    console = get_themed_console(icon_mode="text" if no_emoji else "emoji")
    provider = create_github_client(settings)
    sequencer = create_deployment_sequencer(
        settings,
        provider,
        console=console,
        progress=create_progress_display(console=console.console),
    )

    if watch:
        watcher = FirmwareWatcher(
            provider,
            sequencer,
            console=console,
            poll_interval=settings.github_poll_interval,
        )
        try:
            watcher.run()
        except KeyboardInterrupt:
            console.print()
            console.print("Stopped watching for firmware builds")
            raise typer.Exit(0) from None
        return

    try:
        sequencer.deploy()
    except KeyboardInterrupt:
        console.print()
        console.print_warning("Deployment interrupted")
        raise typer.Exit(INTERRUPTED_EXIT_CODE) from None


def main() -> int:
    """Main CLI entry point."""
    exit_code = 0

    try:
        app()
        exit_code = 0

    except SystemExit as e:
        # Capture SystemExit code (normal CLI exit)
        exit_code = e.code if isinstance(e.code, int) else 0

    except Exception as e:
        logger.exception(f"Unexpected error: {e}")

        # Check if we should print stack trace (verbosity level)
        print_stack_trace_if_verbose()

        exit_code = 1

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
