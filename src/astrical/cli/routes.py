"""Route model for astrical CLI.

The registry is grouped by the first token of each command path:

* ``SingletonRoute`` - the root is a command on its own (``astrical init``).
* ``FamilyRoute`` - the root fans out to subcommands (``astrical module list``).

The variant is decided once, after the full registry is loaded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence, Union

from astrical.cli.descriptor import OptionSpec
from astrical.cli.registry import RegistryEntry


@dataclass(frozen=True)
class SingletonRoute:
    """A root token bound to exactly one command."""

    root: str
    entry: RegistryEntry


@dataclass(frozen=True)
class FamilyRoute:
    """A root token fanning out to subcommands.

    Attributes:
        root: The shared first token.
        members: Member entries keyed by their full command name.
    """

    root: str
    members: Mapping[str, RegistryEntry] = field(default_factory=dict)

    def resolve(self, subcommand: str) -> RegistryEntry | None:
        """Exact lookup of ``"<root> <subcommand>"``."""
        return self.members.get(f"{self.root} {subcommand}")


Route = Union[SingletonRoute, FamilyRoute]


@dataclass(frozen=True)
class CommandUsage:
    """What the parser was built with for one command.

    Attributes:
        raw_name: Usage name the parser was registered with.
        description: Command description.
        options: Declared options, in order.
    """

    raw_name: str
    description: str = ""
    options: tuple[OptionSpec, ...] = ()


def build_routes(entries: Sequence[RegistryEntry]) -> dict[str, Route]:
    """Group registry entries by root token.

    A root with exactly one entry whose path is the root alone becomes a
    singleton. Anything else - several entries, or one entry with a longer
    path - becomes a family.

    Returns:
        Routes keyed by root, in order of first appearance.
    """
    groups: dict[str, list[RegistryEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.root, []).append(entry)

    routes: dict[str, Route] = {}
    for root, members in groups.items():
        if len(members) == 1 and members[0].path == (root,):
            routes[root] = SingletonRoute(root=root, entry=members[0])
        else:
            routes[root] = FamilyRoute(
                root=root, members={entry.name: entry for entry in members}
            )
    return routes


__all__ = ["SingletonRoute", "FamilyRoute", "Route", "CommandUsage", "build_routes"]
