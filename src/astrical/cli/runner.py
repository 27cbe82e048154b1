"""Command execution for astrical CLI.

Every dispatch path ends here: a fresh command instance is built for the
invocation, initialized and run. Exceptions are caught once, at this
boundary, and turned into an error message and an exit code. Side effects
the command already performed are not rolled back.
"""

from __future__ import annotations

import logging
from typing import Any

from astrical.cli.context import CommandContext
from astrical.cli.registry import RegistryEntry
from astrical.cli.utils import print_error

logger = logging.getLogger(__name__)


def run_command(entry: RegistryEntry, options: dict[str, Any], context: CommandContext) -> int:
    """Run one command invocation.

    Args:
        entry: The resolved command.
        options: The options object of this invocation.
        context: The invocation context passed to ``init`` and ``run``.

    Returns:
        0 on success, the command's own exit code when ``run`` returns an
        int, otherwise 1 (or ``exit_code`` of the raised error).
    """
    logger.debug("Running '%s' with options %s", entry.name, options)
    try:
        command = entry.factory(options)
        command.init(context)
        result = command.run(options, context)
    except Exception as e:
        print_error(e, verbose=bool(options.get("debug")))
        return getattr(e, "exit_code", 1)

    return result if isinstance(result, int) else 0


__all__ = ["run_command"]
