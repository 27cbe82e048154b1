"""Built-in astrical commands.

Each module below this directory is a command; its location is its command
path (``module/list.py`` is ``astrical module list``). A module exports the
command factory as ``COMMAND`` and its schema as ``DESCRIPTOR``.

This file maps to no command and is skipped by the loader.
"""
