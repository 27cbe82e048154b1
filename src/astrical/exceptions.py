"""
Custom exception hierarchy for astrical.

Provides consistent error handling with context, suggestions, and actionable guidance.
All exceptions include:
- Context information (command path, source file, etc.)
- Suggestions for how to fix the issue
- Clear, formatted error messages

Example::

    from astrical.exceptions import RoutingError

    raise RoutingError(
        "Unknown subcommand 'ad' for 'module'",
        context={"root": "module", "available": ["add", "list"]},
        suggestions=["Run 'astrical help module' to list the subcommands"],
    )
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class AstricalError(Exception):
    """
    Base exception for all astrical errors.

    Provides consistent formatting with context and suggestions.

    Attributes:
        context: Dictionary of contextual information (command, file, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class UsageError(AstricalError):
    """
    The command line could not be parsed.

    Raised by the argument parser in place of argparse's own
    print-usage-and-exit behaviour.

    Example::

        raise UsageError(
            "the following arguments are required: target",
            context={"command": "deploy"},
        )
    """

    pass


class RoutingError(AstricalError):
    """
    Invocation does not resolve to a registered command.

    Raised for an unknown subcommand of a command family and for help
    requests naming a path that is not registered.
    """

    pass


class DescriptorError(AstricalError):
    """
    A command descriptor has an invalid shape.

    Collects every problem instead of failing on the first one.

    Example::

        raise DescriptorError(
            ["Variadic argument 'files' must be the last argument"],
            context={"command": "copy"},
        )

    Attributes:
        errors: List of individual problems
    """

    def __init__(
        self,
        errors: List[str],
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.errors = errors
        message = f"Invalid command descriptor ({len(errors)} error(s)):\n"
        message += "\n".join(f"  {i + 1}. {e}" for i, e in enumerate(errors))
        super().__init__(message, context, suggestions)


class CommandLoadError(AstricalError):
    """
    A command module does not follow the command module contract.

    Example::

        raise CommandLoadError(
            "Command module does not define COMMAND",
            file_path="commands/deploy.py",
            suggestions=["Export the command class as COMMAND"],
        )
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        file_path: Optional[Union[str, Path]] = None,
    ):
        ctx = context or {}
        if file_path and "file" not in ctx:
            ctx["file"] = str(file_path)
        super().__init__(message, ctx, suggestions)


class ConfigurationError(AstricalError):
    """
    Project configuration is unreadable or invalid.

    Example::

        raise ConfigurationError(
            "Invalid YAML in project config",
            context={"file": "astrical.yml", "line": 3},
            suggestions=["Check the indentation of the file"],
        )
    """

    pass


class ProjectNotFoundError(AstricalError):
    """
    A command that needs a project was run outside of one.
    """

    pass


class CommandError(AstricalError):
    """
    A command failed and wants the process to exit with ``exit_code``.

    Attributes:
        exit_code: Process exit status requested by the command
    """

    def __init__(
        self,
        message: str,
        exit_code: int = 1,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.exit_code = exit_code
        super().__init__(message, context, suggestions)


__all__ = [
    "AstricalError",
    "UsageError",
    "RoutingError",
    "DescriptorError",
    "CommandLoadError",
    "ConfigurationError",
    "ProjectNotFoundError",
    "CommandError",
]
