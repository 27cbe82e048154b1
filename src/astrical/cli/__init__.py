"""
Command-line interface for astrical.

Commands are discovered from the ``astrical/commands`` directory at startup:

    astrical help [command...]          - Show help for all or one command
    astrical module list                - List the modules of a project

Global options (accepted by every command):

    --root-dir <path>                   - Override project root discovery
    --debug                             - Verbose diagnostics and stack traces
    -h, --help                          - Show help

Examples:
    astrical --help
    astrical help module
    astrical module list --root-dir ./my-site
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

from astrical import __version__
from astrical.cli.registry import load_commands
from astrical.cli.router import Router
from astrical.logging import configure_logging

__all__ = ["main", "DEFAULT_COMMANDS_DIR", "PROG"]

logger = logging.getLogger(__name__)

PROG = "astrical"

DEFAULT_COMMANDS_DIR = Path(__file__).resolve().parent.parent / "commands"


def main(argv: Optional[List[str]] = None, commands_dir: Optional[Path] = None) -> int:
    """Main entry point for the astrical CLI."""
    if argv is None:
        argv = sys.argv[1:]

    configure_logging(debug="--debug" in argv)

    entries = load_commands(commands_dir or DEFAULT_COMMANDS_DIR)
    router = Router(entries, prog=PROG, version=__version__)

    try:
        return router.dispatch(argv)
    except KeyboardInterrupt:
        logger.warning("Operation cancelled by user.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
