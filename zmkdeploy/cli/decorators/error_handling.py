"""Error handling decorators for CLI commands."""

import logging
import sys
import traceback
from collections.abc import Callable
from functools import wraps
from typing import Any

import requests
import typer
from rich.markup import escape

from zmkdeploy.cli.helpers.output import print_error_message
from zmkdeploy.core.errors import ConfigError, DeployError
from zmkdeploy.core.structlog_logger import get_struct_logger


__all__ = ["handle_errors", "print_stack_trace_if_verbose"]

logger = get_struct_logger(__name__)


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to handle common exceptions in CLI commands.

    Known errors are reported to the user and turned into exit status 1.
    Services already log failures, so nothing is logged again here except
    unexpected errors.

    Args:
        func: The function to decorate

    Returns:
        Decorated function with error handling
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        use_emoji = not kwargs.get("no_emoji", False)
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except ConfigError as e:
            print_error_message(
                f"Configuration error: {escape(str(e))}", use_emoji=use_emoji
            )
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except DeployError as e:
            print_error_message(f"Error: {escape(str(e))}", use_emoji=use_emoji)
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except requests.RequestException as e:
            print_error_message(
                f"Network error: {escape(str(e))}", use_emoji=use_emoji
            )
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except Exception as e:
            exc_info = logging.getLogger().isEnabledFor(logging.DEBUG)
            logger.error("unexpected_error", error=str(e), exc_info=exc_info)
            print_error_message(
                f"Unexpected error: {escape(str(e))}", use_emoji=use_emoji
            )
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e

    return wrapper


def print_stack_trace_if_verbose() -> None:
    """Print stack trace if verbose/debug mode is enabled."""
    if any(arg in sys.argv for arg in ["-v", "-vv", "--verbose", "--debug"]):
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
