"""Command routing for astrical CLI.

Registers one argparse subparser per root token of the registry and
dispatches parsed invocations to the resolved command:

* singleton routes get the full argument shape of their descriptor::

      astrical init <directory> [--repo <url>] [--root-dir <path>] [--debug]

* family routes get a catch-all that is resolved at invocation time::

      astrical module [subcommand] [...rest]

  Unknown flags in ``rest`` are forwarded to the resolved subcommand
  instead of being rejected.
"""

from __future__ import annotations

import argparse
import logging
from typing import Any, Optional, Sequence

from astrical.cli.binding import bind_arguments, normalize_positionals
from astrical.cli.context import CommandContext
from astrical.cli.descriptor import GLOBAL_OPTIONS, HELP_FLAGS, RESERVED_OPTION_NAMES, OptionSpec
from astrical.cli.help import HelpSynthesizer
from astrical.cli.registry import RegistryEntry
from astrical.cli.routes import CommandUsage, FamilyRoute, SingletonRoute, build_routes
from astrical.cli.runner import run_command
from astrical.cli.utils import print_error
from astrical.exceptions import AstricalError, RoutingError, UsageError

logger = logging.getLogger(__name__)

# Namespace attributes used by the router itself; option names never start with "_"
COMMAND_DEST = "_command"
SUBCOMMAND_DEST = "_subcommand"
REST_DEST = "_rest"


class CommandParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str):
        raise UsageError(
            message,
            suggestions=[f"Run '{self.prog} --help' for usage"],
        )


def _add_option(parser: argparse.ArgumentParser, opt: OptionSpec, default: Any) -> None:
    kwargs: dict[str, Any] = {"dest": opt.name, "default": default, "help": opt.description}
    if opt.takes_value:
        parser.add_argument(*opt.option_strings, metavar=opt.metavar, **kwargs)
    else:
        parser.add_argument(*opt.option_strings, action="store_const", const=True, **kwargs)


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    # SUPPRESS keeps a subparser from overwriting a value given before the command
    for opt in GLOBAL_OPTIONS:
        _add_option(parser, opt, default=argparse.SUPPRESS)


def _global_values(namespace: argparse.Namespace) -> dict[str, Any]:
    return {name: getattr(namespace, name, None) for name in RESERVED_OPTION_NAMES}


def forwarded_options(tokens: Sequence[str]) -> tuple[dict[str, Any], list[str]]:
    """Split unknown tokens into option values and positionals.

    ``--key=value`` -> ``"value"``; ``--key value`` -> ``"value"`` when the
    next token is not a flag, otherwise ``--key`` -> True; ``--no-key`` ->
    False; ``-k`` works like ``--k``. Dashes in keys become underscores.
    Everything after ``--`` is positional.

    Returns:
        (options, positionals), positionals in their original order
    """
    options: dict[str, Any] = {}
    positionals: list[str] = []
    tokens = list(tokens)
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if token == "--":
            positionals.extend(tokens[index:])
            break
        if not token.startswith("-") or token == "-":
            positionals.append(token)
            continue
        key, sep, value = token.lstrip("-").partition("=")
        key = key.replace("-", "_")
        if not key:
            continue
        if sep:
            options[key] = value
        elif token.startswith("--no-") and len(key) > 3:
            options[key[3:]] = False
        elif index < len(tokens) and not tokens[index].startswith("-"):
            options[key] = tokens[index]
            index += 1
        else:
            options[key] = True
    return options, positionals


class Router:
    """Routes invocations to registry entries.

    Attributes:
        entries: The registry (read only).
        routes: Routes keyed by root token.
        usage_table: Raw usage names the parsers were built with.
        parser: Top-level argument parser.
        help: Help renderer over the same data.
    """

    def __init__(
        self,
        entries: Sequence[RegistryEntry],
        prog: str = "astrical",
        version: Optional[str] = None,
        console=None,
    ):
        self.entries = tuple(entries)
        self.prog = prog
        self.routes = build_routes(self.entries)
        self.usage_table: dict[str, CommandUsage] = {}
        self._member_parsers: dict[str, CommandParser] = {}
        self.parser = self._build_parser(version)
        self.help = HelpSynthesizer(
            self.entries, self.routes, self.usage_table, prog=prog, console=console
        )

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def _build_parser(self, version: Optional[str]) -> CommandParser:
        parser = CommandParser(prog=self.prog, add_help=False, allow_abbrev=False)
        if version:
            parser.add_argument(
                "--version", action="version", version=f"{self.prog} {version}"
            )
        _add_global_options(parser)

        subparsers = parser.add_subparsers(dest=COMMAND_DEST, metavar="<command>")
        for route in self.routes.values():
            if isinstance(route, SingletonRoute):
                self._register_singleton(subparsers, route)
            else:
                self._register_family(subparsers, route)
        return parser

    def _register_singleton(self, subparsers, route: SingletonRoute) -> None:
        entry = route.entry
        descriptor = entry.descriptor
        raw_name = descriptor.usage(entry.path)

        sub = subparsers.add_parser(
            route.root,
            help=descriptor.description,
            usage=f"{self.prog} {raw_name} [options]",
            add_help=False,
            allow_abbrev=False,
        )
        for index, spec in enumerate(descriptor.args):
            if spec.variadic:
                nargs = "+" if spec.required else "*"
            else:
                nargs = None if spec.required else "?"
            sub.add_argument(
                f"_arg_{index}", nargs=nargs, metavar=spec.name, help=spec.description
            )
        for opt in descriptor.options:
            _add_option(sub, opt, default=opt.default)
        _add_global_options(sub)

        self.usage_table[entry.name] = CommandUsage(
            raw_name=raw_name,
            description=descriptor.description,
            options=tuple(descriptor.options),
        )
        logger.debug("Registered command '%s'", raw_name)

    def _register_family(self, subparsers, route: FamilyRoute) -> None:
        sub = subparsers.add_parser(
            route.root,
            help=f"Manage {route.root} commands",
            usage=f"{self.prog} {route.root} [subcommand] [...rest]",
            add_help=False,
            allow_abbrev=False,
        )
        _add_global_options(sub)
        sub.add_argument(SUBCOMMAND_DEST, nargs="?", metavar="subcommand")
        sub.add_argument(REST_DEST, nargs=argparse.REMAINDER, metavar="rest")

        for entry in route.members.values():
            self._member_parsers[entry.name] = self._build_member_parser(entry)
        logger.debug("Registered command family '%s' (%d)", route.root, len(route.members))

    def _build_member_parser(self, entry: RegistryEntry) -> CommandParser:
        descriptor = entry.descriptor
        raw_name = descriptor.usage(entry.path)

        parser = CommandParser(
            prog=f"{self.prog} {entry.name}",
            usage=f"{self.prog} {raw_name} [options]",
            add_help=False,
            allow_abbrev=False,
        )
        for opt in descriptor.options:
            _add_option(parser, opt, default=opt.default)
        _add_global_options(parser)

        self.usage_table[entry.name] = CommandUsage(
            raw_name=raw_name,
            description=descriptor.description,
            options=tuple(descriptor.options),
        )
        return parser

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, argv: Sequence[str]) -> int:
        """Parse ``argv`` and run the resolved command.

        Returns:
            Process exit code.
        """
        argv = list(argv)
        try:
            help_path = self._help_request(argv)
            if help_path is not None:
                self.help.render(help_path)
                return 0

            namespace, extras = self.parser.parse_known_args(argv)
            root = getattr(namespace, COMMAND_DEST, None)
            if root is None:
                if extras:
                    self.parser.error(f"unrecognized arguments: {' '.join(extras)}")
                self.help.render([])
                return 0

            route = self.routes[root]
            if isinstance(route, SingletonRoute):
                if extras:
                    self.parser.error(f"unrecognized arguments: {' '.join(extras)}")
                return self._dispatch_singleton(route, namespace)
            return self._dispatch_family(route, namespace, extras)
        except AstricalError as e:
            print_error(e)
            return 1

    def _help_request(self, argv: list[str]) -> Optional[list[str]]:
        """Path to render help for, or None when no help was asked for.

        Checked before parsing so a help flag wins over parse errors.
        """
        if not argv:
            return []

        value_flags = {s for opt in GLOBAL_OPTIONS if opt.takes_value for s in opt.option_strings}
        wants_help = False
        tokens: list[str] = []
        skip_next = False
        for token in argv:
            if skip_next:
                skip_next = False
                continue
            if token == "--":
                break
            if token in HELP_FLAGS:
                wants_help = True
            elif token in value_flags:
                skip_next = True
            elif not token.startswith("-"):
                tokens.append(token)

        if not wants_help:
            return None
        if not tokens:
            return []
        if isinstance(self.routes.get(tokens[0]), FamilyRoute):
            return tokens[:2]
        return tokens[:1]

    def _dispatch_singleton(self, route: SingletonRoute, namespace: argparse.Namespace) -> int:
        entry = route.entry
        descriptor = entry.descriptor

        positionals: list[Any] = []
        for index, spec in enumerate(descriptor.args):
            value = getattr(namespace, f"_arg_{index}", None)
            if value is None:
                break
            if spec.variadic:
                positionals.extend(value)
            else:
                positionals.append(value)

        options = _global_values(namespace)
        for opt in descriptor.options:
            options[opt.name] = getattr(namespace, opt.name, opt.default)
        bind_arguments(descriptor.args, positionals, options)
        return self._execute(entry, options)

    def _dispatch_family(
        self, route: FamilyRoute, namespace: argparse.Namespace, extras: Sequence[str]
    ) -> int:
        subcommand = getattr(namespace, SUBCOMMAND_DEST, None)
        if not subcommand:
            self.help.render([route.root])
            return 0

        entry = route.resolve(subcommand)
        if entry is None:
            raise RoutingError(
                f"Unknown subcommand '{subcommand}' for '{route.root}'",
                suggestions=[f"Run '{self.prog} help {route.root}' to list the available subcommands"],
            )

        descriptor = entry.descriptor
        rest = getattr(namespace, REST_DEST, None) or []
        # Member parsers declare no positionals; unknown keeps the order of rest
        member_ns, unknown = self._member_parsers[entry.name].parse_known_args(rest)
        forwarded, values = forwarded_options([*extras, *unknown])

        options = _global_values(namespace)
        for name in RESERVED_OPTION_NAMES:
            if hasattr(member_ns, name):
                options[name] = getattr(member_ns, name)
        for opt in descriptor.options:
            options[opt.name] = getattr(member_ns, opt.name, opt.default)
        options.update(forwarded)

        # Positional mapping is applied last and wins over forwarded flags
        positionals = normalize_positionals(values)
        bind_arguments(descriptor.args, positionals, options)
        return self._execute(entry, options)

    def _execute(self, entry: RegistryEntry, options: dict[str, Any]) -> int:
        context = CommandContext(
            path=entry.path,
            descriptor=entry.descriptor,
            registry=self.entries,
            help=self.help,
        )
        return run_command(entry, options, context)


__all__ = ["Router", "CommandParser", "forwarded_options"]
