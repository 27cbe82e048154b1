"""Help output for astrical CLI.

Renders, from the same descriptor data the router registers:

* the global command listing (no path),
* the listing of one command family (``astrical help module``),
* the usage, arguments and options of a single command.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping, Sequence

from astrical.cli.routes import CommandUsage, FamilyRoute, Route
from astrical.cli.utils import get_console
from astrical.exceptions import RoutingError

if TYPE_CHECKING:
    from rich.console import Console

    from astrical.cli.registry import RegistryEntry

logger = logging.getLogger(__name__)

MIN_COLUMN = 16


class HelpSynthesizer:
    """Renders help text. Reads the registry and usage table, never writes them."""

    def __init__(
        self,
        entries: Sequence["RegistryEntry"],
        routes: Mapping[str, Route],
        usage_table: Mapping[str, CommandUsage],
        prog: str = "astrical",
        console: "Console | None" = None,
    ):
        self.entries = tuple(entries)
        self.routes = routes
        self.usage_table = usage_table
        self.prog = prog
        self._console = console
        self._by_name = {entry.name: entry for entry in self.entries}

    @property
    def console(self) -> "Console":
        return self._console or get_console()

    def render(self, path: Sequence[str] = ()) -> None:
        """Render help for a command path.

        Args:
            path: Empty for the global listing, a family root for the
                family listing, or a registered command path.

        Raises:
            RoutingError: If the path names no known command.
        """
        tokens = [token for token in path if token]
        if not tokens:
            self._render_global()
            return

        name = " ".join(tokens)
        if len(tokens) == 1 and isinstance(self.routes.get(tokens[0]), FamilyRoute):
            self._render_family(tokens[0])
            return

        entry = self._by_name.get(name)
        if entry is not None:
            usage = self.usage_table.get(name)
            if usage is None:
                # Loader knows the command but no parser was registered for it
                logger.debug("No usage registered for '%s'", name)
                return
            self._render_command(entry, usage)
            return

        raise RoutingError(
            f"Unknown command: {name}",
            suggestions=[f"Run '{self.prog} --help' to list the available commands"],
        )

    def _render_global(self) -> None:
        self._line(f"Usage: {self.prog} <command> [options]", style="bold")
        self._line()
        self._line("Commands:", style="bold")
        self._rows([(e.name, e.descriptor.description) for e in self.entries])
        self._line()
        self._line("Options:", style="bold")
        self._rows([("-h, --help", "Display this message"), ("--version", "Display version number")])
        self._line()
        self._line(f"Run '{self.prog} help <command>' for more information on a command.", style="dim")

    def _render_family(self, root: str) -> None:
        prefix = f"{root} "
        members = [e for e in self.entries if e.name.startswith(prefix)]
        self._line(f"Commands for {root}:", style="bold")
        self._rows([(e.name, e.descriptor.description) for e in members])

    def _render_command(self, entry: "RegistryEntry", usage: CommandUsage) -> None:
        self._line(f"Usage: {self.prog} {usage.raw_name}", style="bold")
        if usage.description:
            self._line()
            self._line(usage.description)

        if entry.descriptor.args:
            self._line()
            self._line("Arguments:", style="bold")
            self._rows(
                [
                    (
                        spec.name,
                        (spec.description or "") + (" (required)" if spec.required else ""),
                    )
                    for spec in entry.descriptor.args
                ]
            )

        if usage.options:
            self._line()
            self._line("Options:", style="bold")
            rows = []
            for opt in usage.options:
                text = opt.description or ""
                if opt.default is not None:
                    text = f"{text} (default: {opt.default})".strip()
                rows.append((opt.flags, text))
            self._rows(rows)

    def _rows(self, rows: Sequence[tuple[str, str]]) -> None:
        from rich.text import Text

        if not rows:
            return
        width = max(MIN_COLUMN, max(len(label) for label, _ in rows) + 2)
        for label, text in rows:
            line = Text("  ")
            line.append(label.ljust(width), style="cyan")
            line.append(text or "")
            self.console.print(line, soft_wrap=True)

    def _line(self, text: str = "", style: str | None = None) -> None:
        from rich.text import Text

        self.console.print(Text(text, style=style or ""), soft_wrap=True)


__all__ = ["HelpSynthesizer"]
