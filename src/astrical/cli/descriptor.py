"""Declarative command schema.

Every command module exports a ``DESCRIPTOR`` next to its ``COMMAND``
factory. The descriptor is the single source the router, the argument
binder and the help output read from::

    from astrical.cli.descriptor import CommandDescriptor, argument, option

    DESCRIPTOR = CommandDescriptor(
        description="Add a module as a git submodule",
        args=[
            argument("url", required=True, description="Git repository URL"),
            argument("name", description="Folder name for the module"),
        ],
        options=[option("--branch <name>", "Branch to track", default="main")],
        requires_project=True,
    )

Argument order defines positional binding order and help display order. A
trailing ``...`` on an argument name makes it variadic: it absorbs all
remaining positional values and must be the last argument.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Sequence

from astrical.exceptions import DescriptorError

VARIADIC_SUFFIX = "..."

HELP_FLAGS = ("-h", "--help")

_PLACEHOLDER_RE = re.compile(r"^[<\[]([^>\]]*)[>\]]$")


@dataclass(frozen=True)
class ArgumentSpec:
    """One positional parameter of a command."""

    name: str
    required: bool = False
    variadic: bool = False
    description: str = ""

    @classmethod
    def declare(cls, name: str, required: bool = False, description: str = "") -> "ArgumentSpec":
        """Build a spec from a declared name, where ``name...`` means variadic."""
        variadic = name.endswith(VARIADIC_SUFFIX)
        if variadic:
            name = name[: -len(VARIADIC_SUFFIX)]
        return cls(name=name, required=required, variadic=variadic, description=description or "")

    @property
    def usage(self) -> str:
        """Usage token: ``<name>``, ``[name]``, ``<...name>`` or ``[...name]``."""
        label = f"{VARIADIC_SUFFIX}{self.name}" if self.variadic else self.name
        return f"<{label}>" if self.required else f"[{label}]"


@dataclass(frozen=True)
class OptionSpec:
    """One flag of a command.

    ``flags`` uses the declaration syntax ``"--force"``, ``"--repo <url>"``
    or ``"-f, --force"``. A ``<value>`` or ``[value]`` placeholder makes the
    option take a value; without one it is a switch that stores ``True``.
    """

    flags: str
    description: str = ""
    default: Any = None

    @property
    def option_strings(self) -> tuple[str, ...]:
        tokens = self.flags.replace(",", " ").split()
        return tuple(t for t in tokens if t.startswith("-"))

    @property
    def long_flag(self) -> str:
        strings = self.option_strings
        for s in strings:
            if s.startswith("--"):
                return s
        return strings[0] if strings else ""

    @property
    def metavar(self) -> str | None:
        for token in self.flags.replace(",", " ").split():
            match = _PLACEHOLDER_RE.match(token)
            if match:
                return match.group(1)
        return None

    @property
    def takes_value(self) -> bool:
        return self.metavar is not None

    @property
    def name(self) -> str:
        """Key under which the option lands in the options object."""
        return self.long_flag.lstrip("-").replace("-", "_")


def argument(name: str, required: bool = False, description: str = "") -> ArgumentSpec:
    """Shorthand for :meth:`ArgumentSpec.declare`."""
    return ArgumentSpec.declare(name, required=required, description=description)


def option(flags: str, description: str = "", default: Any = None) -> OptionSpec:
    """Shorthand for :class:`OptionSpec`."""
    return OptionSpec(flags=flags, description=description, default=default)


# Flags every command accepts in addition to its own options.
GLOBAL_OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec("--root-dir <path>", "Override project root"),
    OptionSpec("--debug", "Enable debug mode"),
)

RESERVED_OPTION_NAMES = tuple(o.name for o in GLOBAL_OPTIONS)


@dataclass(frozen=True)
class CommandDescriptor:
    """Static schema of one command."""

    description: str = ""
    args: Sequence[ArgumentSpec] = field(default_factory=tuple)
    options: Sequence[OptionSpec] = field(default_factory=tuple)
    requires_project: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))
        object.__setattr__(self, "options", tuple(self.options))

    def usage(self, path: Sequence[str]) -> str:
        """Raw usage name, e.g. ``module add <url> [name]``."""
        return " ".join([*path, *(spec.usage for spec in self.args)])

    def validate(self, path: Sequence[str]) -> None:
        """Check the descriptor can be registered.

        Raises:
            DescriptorError: Listing every problem found
        """
        errors: list[str] = []

        variadic = [i for i, spec in enumerate(self.args) if spec.variadic]
        if len(variadic) > 1:
            names = ", ".join(self.args[i].name for i in variadic)
            errors.append(f"At most one variadic argument is allowed (got: {names})")
        if variadic and variadic[-1] != len(self.args) - 1:
            errors.append(
                f"Variadic argument '{self.args[variadic[-1]].name}' must be the last argument"
            )

        optional = None
        for spec in self.args:
            if not spec.name:
                errors.append("Argument names must not be empty")
            if not spec.required:
                optional = optional or spec
            elif optional is not None:
                # Positionals bind by index, so a value can never skip an optional slot
                errors.append(
                    f"Required argument '{spec.name}' follows optional argument '{optional.name}'"
                )

        reserved = {s for o in GLOBAL_OPTIONS for s in o.option_strings} | set(HELP_FLAGS)
        seen: set[str] = set()
        for opt in self.options:
            if not opt.option_strings:
                errors.append(f"Option '{opt.flags}' declares no flag")
                continue
            clash = reserved.intersection(opt.option_strings)
            if clash:
                errors.append(f"Option '{opt.flags}' clashes with global flag {sorted(clash)[0]}")
            if opt.name in seen:
                errors.append(f"Option name '{opt.name}' is declared twice")
            seen.add(opt.name)

        if errors:
            raise DescriptorError(errors, context={"command": " ".join(path)})


__all__ = [
    "ArgumentSpec",
    "OptionSpec",
    "CommandDescriptor",
    "argument",
    "option",
    "GLOBAL_OPTIONS",
    "HELP_FLAGS",
    "RESERVED_OPTION_NAMES",
]
