"""Invocation context handed to commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from astrical.cli.descriptor import CommandDescriptor

if TYPE_CHECKING:
    from astrical.cli.help import HelpSynthesizer
    from astrical.cli.registry import RegistryEntry


@dataclass(frozen=True)
class CommandContext:
    """What a running command may see of the dispatcher.

    Attributes:
        path: Path of the command being run.
        descriptor: Its declared schema.
        registry: All registered commands.
        help: Renders help output.
    """

    path: tuple[str, ...]
    descriptor: CommandDescriptor
    registry: tuple["RegistryEntry", ...] = ()
    help: "HelpSynthesizer | None" = field(default=None, repr=False)

    @property
    def name(self) -> str:
        return " ".join(self.path)

    def show_help(self, path: Sequence[str] = ()) -> None:
        """Render help for ``path`` (global help when empty)."""
        if self.help is None:
            return
        self.help.render(list(path))

    def commands(self) -> list[str]:
        """Names of all registered commands."""
        return [entry.name for entry in self.registry]


__all__ = ["CommandContext"]
