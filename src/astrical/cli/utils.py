"""Shared console helpers for the CLI."""

from __future__ import annotations

import sys
import traceback
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rich.console import Console

__all__ = ["format_error", "print_error", "get_console", "get_error_console"]

# Module-level consoles, created lazily
_console: Console | None = None
_error_console: Console | None = None


def get_console() -> Console:
    """Get or create the Rich console for regular output (stdout)."""
    global _console
    if _console is None:
        from rich.console import Console

        _console = Console(highlight=False)
    return _console


def get_error_console() -> Console:
    """Get or create the Rich console for error output.

    Returns a console configured for stderr with appropriate settings.
    The console is created lazily and cached for reuse.
    """
    global _error_console
    if _error_console is None:
        from rich.console import Console

        _error_console = Console(stderr=True, highlight=False)
    return _error_console


def print_error(e: Exception | str, verbose: bool = False) -> None:
    """
    Print an error message in red on stderr.

    Args:
        e: The exception (or message) to print
        verbose: If True, also print the stack trace of the exception
    """
    from rich.text import Text

    console = get_error_console()
    console.print(Text(format_error(e), style="red"), soft_wrap=True)

    if verbose and isinstance(e, BaseException):
        trace = "".join(traceback.format_exception(type(e), e, e.__traceback__))
        print(trace, file=sys.stderr, end="")


def format_error(e: Exception | str) -> str:
    """
    Format an error for display (plain text).

    Args:
        e: The exception or message to format

    Returns:
        The message text; exceptions without a message show their type
    """
    if isinstance(e, str):
        return e
    message = str(e)
    return message or type(e).__name__
