"""Command protocol for astrical CLI.

Defines the interface command objects must implement. A command module
exports the factory as ``COMMAND`` and its schema as ``DESCRIPTOR``; the
dispatcher builds a fresh instance for every invocation and drives it
through ``init`` and ``run``.

Usage:
    from astrical.cli.base import BaseCommand
    from astrical.cli.descriptor import CommandDescriptor, argument

    DESCRIPTOR = CommandDescriptor(
        description="Greet someone",
        args=[argument("name", required=True)],
    )

    class GreetCommand(BaseCommand):
        def run(self, options, context):
            self.info(f"Hello {options['name']}")

    COMMAND = GreetCommand
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from astrical.cli.context import CommandContext


@runtime_checkable
class Command(Protocol):
    """Protocol for command instances.

    Methods:
        init: Resolve the environment (project root, config) for this run.
        run: Perform the command with the bound options object.
    """

    def init(self, context: "CommandContext") -> None:
        """Prepare the command before it runs.

        Args:
            context: The invocation context (command path, descriptor,
                registry access and help rendering).
        """
        ...

    def run(self, options: dict[str, Any], context: "CommandContext") -> Optional[int]:
        """Execute the command.

        Args:
            options: Bound positional arguments, declared options and the
                global ``root_dir``/``debug`` keys.
            context: The invocation context.

        Returns:
            Exit code, or None for success.
        """
        ...


# Factories are called with the options object of the invocation, or with
# no arguments for the loader's introspection instance.
CommandFactory = Callable[..., Command]

__all__ = ["Command", "CommandFactory"]
