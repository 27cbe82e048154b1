"""Base class for astrical commands.

Resolves the project the command runs in and provides the output helpers
commands share. Subclasses implement :meth:`BaseCommand.run`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, NoReturn, Optional

from astrical.cli.utils import get_console
from astrical.config import find_project_root, load_config
from astrical.exceptions import CommandError, ProjectNotFoundError

if TYPE_CHECKING:
    from astrical.cli.context import CommandContext

logger = logging.getLogger(__name__)


class BaseCommand:
    """Common behaviour of built-in commands.

    Attributes:
        global_options: Options object the instance was created with.
        project_root: Root of the current project, once :meth:`init` ran.
        config: Parsed ``astrical.yml`` of the project (empty without one).
    """

    def __init__(self, options: Optional[dict[str, Any]] = None):
        self.global_options = dict(options or {})
        self.project_root: Optional[Path] = None
        self.config: dict[str, Any] = {}

    def init(self, context: "CommandContext") -> None:
        """Locate the project and load its configuration.

        ``--root-dir`` wins over discovery from the current directory.

        Raises:
            ProjectNotFoundError: If the command requires a project and none was found.
        """
        root_dir = self.global_options.get("root_dir")
        if root_dir:
            self.project_root = Path(root_dir)
        else:
            self.project_root = find_project_root(Path.cwd())

        if self.project_root is not None:
            self.config = load_config(self.project_root)
        elif context.descriptor.requires_project:
            raise ProjectNotFoundError(
                f"The '{context.name}' command requires to be run within an Astrical project",
                suggestions=[
                    "Run the command from a directory containing astrical.yml",
                    "Pass --root-dir <path> to point at the project",
                ],
            )

    def run(self, options: dict[str, Any], context: "CommandContext") -> Optional[int]:
        raise NotImplementedError

    # Output helpers

    def info(self, message: str) -> None:
        get_console().print(message, markup=False, soft_wrap=True)

    def success(self, message: str) -> None:
        get_console().print(f"✔ {message}", style="green", markup=False, soft_wrap=True)

    def warn(self, message: str) -> None:
        get_console().print(f"⚠ {message}", style="yellow", markup=False, soft_wrap=True)

    def debug(self, message: str) -> None:
        logger.debug(message)

    def error(self, message: str, exit_code: int = 1) -> NoReturn:
        """Abort the command; the runner prints ``message`` and exits with ``exit_code``."""
        raise CommandError(message, exit_code=exit_code)


__all__ = ["BaseCommand"]
