"""
Logging configuration for astrical.

Diagnostics (command discovery, project lookup) go through module loggers
under the ``astrical`` namespace. Nothing is printed until the CLI calls
:func:`configure_logging`.
"""

import logging

_logger = logging.getLogger("astrical")
_logger.addHandler(logging.NullHandler())  # Default: no output

DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(debug: bool = False, format: str = None) -> logging.Logger:
    """Send astrical diagnostics to stderr.

    Warnings and errors (e.g. a command module that failed to import) are
    always shown; ``debug`` adds the DEBUG stream.

    Args:
        debug: Enable DEBUG level output
        format: Optional custom format string

    Returns:
        The configured ``astrical`` logger
    """
    level = logging.DEBUG if debug else logging.WARNING
    _logger.setLevel(level)

    # Remove existing handlers
    for handler in _logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            _logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format or DEFAULT_FORMAT))
    _logger.addHandler(handler)

    if debug:
        _logger.debug("Debug mode enabled via --debug flag")
    return _logger


def disable_logging() -> None:
    """Remove the stderr handler installed by configure_logging."""
    _logger.setLevel(logging.NOTSET)
    for handler in _logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            _logger.removeHandler(handler)
