"""
astrical: command-line tool for Astrical site projects.

The CLI is assembled at startup from the command modules found under
``astrical/commands``: each file becomes a command path (``module/list.py``
is ``astrical module list``), and its declared arguments and options become
the command-line surface.

Modules:
    cli: Command discovery, routing, argument binding and help output
    commands: Built-in commands
    config: Project root discovery and ``astrical.yml`` loading
    exceptions: Error hierarchy

Quick Start::

    from astrical.cli import main

    main(["help"])
    main(["module", "list", "--root-dir", "path/to/project"])
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
