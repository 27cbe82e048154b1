"""
Project configuration support for astrical.

A project is any directory holding an ``astrical.yml`` (or ``astrical.yaml``)
file. The file marks the project root and carries free-form project settings:

1. ``--root-dir`` on the command line names the project root explicitly
2. Otherwise the root is found by walking up from the current directory

The search stops after the user's home directory or at the filesystem root.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from astrical.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Config file names that mark a project root, in lookup order
CONFIG_FILENAMES = ("astrical.yml", "astrical.yaml")


def get_config_path(root_dir: Path) -> Path | None:
    """
    Return the config file inside ``root_dir``, if there is one.

    Args:
        root_dir: Directory to look in (not searched upwards)

    Returns:
        Path to the config file if found, None otherwise
    """
    for filename in CONFIG_FILENAMES:
        config_path = Path(root_dir) / filename
        if config_path.is_file():
            return config_path
    return None


def find_project_root(start_dir: Path | None = None) -> Path | None:
    """
    Find the project root by walking up the directory tree.

    Args:
        start_dir: Directory to start searching from (default: current directory)

    Returns:
        Directory containing the project config, or None when not inside a project
    """
    current = Path(start_dir or Path.cwd()).resolve()
    home = Path.home().resolve()

    while True:
        config_path = get_config_path(current)
        if config_path is not None:
            logger.debug("Project root found at: %s", current)
            return current

        if current == home:
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config(root_dir: Path) -> dict[str, Any]:
    """
    Load the project config from ``root_dir``.

    Args:
        root_dir: Project root directory

    Returns:
        Parsed config mapping; empty when the root has no config file or the file is empty

    Raises:
        ConfigurationError: If the file cannot be read, is invalid YAML or is not a mapping
    """
    config_path = get_config_path(root_dir)
    if config_path is None:
        logger.debug("No config found in %s", root_dir)
        return {}

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in {config_path}",
            context={"file": str(config_path), "reason": str(e)},
            suggestions=["Check the indentation and quoting of the config file"],
        ) from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Project config {config_path} must be a mapping",
            context={"file": str(config_path), "got": type(data).__name__},
        )

    logger.debug("Loaded config from %s", config_path)
    return data


__all__ = ["CONFIG_FILENAMES", "find_project_root", "get_config_path", "load_config"]
