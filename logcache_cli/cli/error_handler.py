"""Standardized error handling for CLI commands."""

import functools
import sys
from enum import Enum
from typing import Any, Callable, Optional

from rich.console import Console
from rich.text import Text

from ..core.exceptions import (
    ConfigurationError,
    InvalidArgumentsError,
    LogCacheError,
    MalformedResponseError,
    RequestTimeoutError,
    SinkWriteError,
    UnreachableError,
)


class ErrorType(Enum):
    """Categories of errors for appropriate handling."""

    INVALID_ARGUMENTS = "Invalid Arguments"
    CONFIG = "Configuration Error"
    UNREACHABLE = "Unreachable"
    TIMEOUT = "Timeout"
    MALFORMED_RESPONSE = "Malformed Response"
    SINK = "Output Error"
    RUNTIME = "Runtime Error"
    USER_INTERRUPT = "User Interrupted"


# Checked in order, so subclasses must come before their bases
ERROR_CATEGORIES = [
    (InvalidArgumentsError, ErrorType.INVALID_ARGUMENTS, 2),
    (ConfigurationError, ErrorType.CONFIG, 2),
    (UnreachableError, ErrorType.UNREACHABLE, 3),
    (RequestTimeoutError, ErrorType.TIMEOUT, 4),
    (MalformedResponseError, ErrorType.MALFORMED_RESPONSE, 5),
    (SinkWriteError, ErrorType.SINK, 6),
    (LogCacheError, ErrorType.RUNTIME, 1),
]


def categorize(error: LogCacheError):
    """Return the (ErrorType, exit code) pair for a known error."""
    for error_class, error_type, exit_code in ERROR_CATEGORIES:
        if isinstance(error, error_class):
            return error_type, exit_code
    return ErrorType.RUNTIME, 1


class CLIErrorHandler:
    """Centralized error handling for CLI commands.

    Every fatal condition ends the process with one descriptive line on
    stderr and a non-zero exit code.
    """

    def __init__(self, console: Optional[Console] = None, debug: bool = False):
        self.console = console or Console(stderr=True, highlight=False)
        self.debug = debug

    def handle_error(self, error: BaseException) -> None:
        """Handle an error with appropriate formatting and exit code."""
        if isinstance(error, KeyboardInterrupt):
            self._handle_interrupt()
        elif isinstance(error, LogCacheError):
            self._handle_known_error(error)
        else:
            self._handle_unexpected_error(error)

    def _handle_interrupt(self) -> None:
        """Handle keyboard interrupt gracefully."""
        self.console.print("\n[yellow]✗ Operation cancelled by user[/yellow]")
        sys.exit(130)  # Standard exit code for SIGINT

    def _handle_known_error(self, error: LogCacheError) -> None:
        """Handle known errors with a single formatted line."""
        error_type, exit_code = categorize(error)

        error_text = Text()
        error_text.append(f"✗ {error_type.value}: ", style="bold red")
        error_text.append(str(error))
        self.console.print(error_text, soft_wrap=True)

        # Show traceback in debug mode
        if self.debug:
            self.console.print("\n[dim]Debug traceback:[/dim]")
            self.console.print_exception(show_locals=False)

        sys.exit(exit_code)

    def _handle_unexpected_error(self, error: BaseException) -> None:
        """Handle unexpected errors with full traceback."""
        error_text = Text()
        error_text.append("✗ Unexpected error: ", style="bold red")
        error_text.append(str(error))
        self.console.print(error_text, soft_wrap=True)

        self.console.print("\n[dim]Full traceback:[/dim]")
        self.console.print_exception(show_locals=self.debug)

        sys.exit(1)


def handle_cli_error(func: Callable) -> Callable:
    """Decorator for standardized CLI error handling.

    A ``debug`` keyword argument of the wrapped command enables tracebacks.

    Usage:
        @handle_cli_error
        def my_command(debug):
            ...
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        handler = CLIErrorHandler(debug=bool(kwargs.get("debug")))
        try:
            return func(*args, **kwargs)
        except (Exception, KeyboardInterrupt) as e:
            handler.handle_error(e)

    return wrapper
