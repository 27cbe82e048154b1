"""Command discovery for astrical CLI.

Walks a commands directory and turns every command module into a registry
entry. The command path comes from the file location::

    commands/help.py            -> help
    commands/module/list.py     -> module list
    commands/project/__init__.py -> project

A command module exports its factory as ``COMMAND`` and, optionally, its
schema as ``DESCRIPTOR``. A module that fails to import or does not follow
the contract is logged and skipped; the rest of the tree still loads.

Usage:
    from astrical.cli.registry import CommandLoader

    entries = CommandLoader().load(Path("commands"))
"""

from __future__ import annotations

import importlib.util
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Optional

from astrical.cli.command_protocol import CommandFactory
from astrical.cli.descriptor import CommandDescriptor
from astrical.exceptions import CommandLoadError

logger = logging.getLogger(__name__)

INDEX_MODULE = "__init__"
SOURCE_SUFFIX = ".py"

# Prefix for the names command modules are imported under
MODULE_NAMESPACE = "astrical._commands"

Importer = Callable[[Path, str], ModuleType]


@dataclass(frozen=True)
class RegistryEntry:
    """A discovered command.

    Attributes:
        path: Command path tokens, e.g. ``("module", "list")``.
        descriptor: The command's declared schema.
        factory: Builds a command instance (``factory(options)``).
        source: File the command was loaded from.
        instance: Default instance, for introspection only.
    """

    path: tuple[str, ...]
    descriptor: CommandDescriptor
    factory: CommandFactory
    source: Optional[Path] = None
    instance: Any = field(default=None, compare=False, repr=False)

    @property
    def name(self) -> str:
        return " ".join(self.path)

    @property
    def root(self) -> str:
        return self.path[0]


def import_file(path: Path, module_name: str) -> ModuleType:
    """Import a module from a file path."""
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot import {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module


class CommandLoader:
    """Builds the command registry from a directory tree."""

    def __init__(self, importer: Optional[Importer] = None):
        self._importer = importer or import_file

    def load(self, commands_dir: Optional[Path]) -> list[RegistryEntry]:
        """Discover all commands below ``commands_dir``.

        Args:
            commands_dir: Root of the commands tree. A missing directory
                yields an empty registry.

        Returns:
            Registry entries in traversal order.
        """
        entries: list[RegistryEntry] = []
        if not commands_dir or not Path(commands_dir).is_dir():
            logger.debug("No commands directory found at %s", commands_dir)
            return entries

        self._scan(Path(commands_dir), [], entries, set())
        logger.debug("Loaded %d command(s) from %s", len(entries), commands_dir)
        return entries

    def _scan(
        self,
        directory: Path,
        prefix: list[str],
        entries: list[RegistryEntry],
        seen: set[str],
    ) -> None:
        try:
            paths = sorted(directory.iterdir())
        except OSError as e:
            logger.error("Cannot read commands directory %s: %s", directory, e)
            return

        for path in paths:
            if path.is_dir():
                if path.name.startswith(("_", ".")):
                    continue
                self._scan(path, [*prefix, path.name.lower()], entries, seen)
                continue

            # *.pyi stubs have their own suffix and never qualify
            if path.suffix != SOURCE_SUFFIX:
                continue

            stem = path.stem
            if stem == INDEX_MODULE:
                if not prefix:
                    continue
                command_path = tuple(prefix)
            elif stem.startswith("_"):
                continue
            else:
                command_path = (*prefix, stem.lower())

            name = " ".join(command_path)
            if name in seen:
                logger.error("Duplicate command '%s' at %s, skipping", name, path)
                continue

            try:
                entry = self._load_entry(path, command_path)
            except Exception as e:
                logger.error("Failed to load command at %s: %s", path, e)
                logger.debug("Traceback for %s", path, exc_info=True)
                continue

            seen.add(name)
            entries.append(entry)

    def _load_entry(self, path: Path, command_path: tuple[str, ...]) -> RegistryEntry:
        module_name = ".".join([MODULE_NAMESPACE, *(p.replace("-", "_") for p in command_path)])
        module = self._importer(path, module_name)

        factory = getattr(module, "COMMAND", None)
        if factory is None or not callable(factory):
            raise CommandLoadError(
                "Command module does not export a callable COMMAND",
                file_path=path,
                suggestions=["Assign the command class to a module-level COMMAND"],
            )

        descriptor = getattr(module, "DESCRIPTOR", None)
        if descriptor is None:
            descriptor = CommandDescriptor()
        elif not isinstance(descriptor, CommandDescriptor):
            raise CommandLoadError(
                f"DESCRIPTOR must be a CommandDescriptor, got {type(descriptor).__name__}",
                file_path=path,
            )
        descriptor.validate(command_path)

        try:
            instance = factory()
        except Exception as e:
            raise CommandLoadError(
                f"Cannot instantiate command: {e}", file_path=path
            ) from e

        return RegistryEntry(
            path=command_path,
            descriptor=descriptor,
            factory=factory,
            source=path,
            instance=instance,
        )


def load_commands(commands_dir: Optional[Path]) -> list[RegistryEntry]:
    """Discover commands with the default importer."""
    return CommandLoader().load(commands_dir)


__all__ = ["RegistryEntry", "CommandLoader", "import_file", "load_commands"]
