"""Pytest fixtures for astrical tests."""

import textwrap
from pathlib import Path

import pytest

from astrical.logging import disable_logging

# Minimal command module: prints "ran <command path>" when run
COMMAND_TEMPLATE = '''\
from astrical.cli.base import BaseCommand
from astrical.cli.descriptor import CommandDescriptor

DESCRIPTOR = CommandDescriptor(description={description!r})


class TestedCommand(BaseCommand):
    def run(self, options, context):
        self.info("ran " + context.name)


COMMAND = TestedCommand
'''


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every test outside any project and reset CLI logging afterwards."""
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    yield workdir
    disable_logging()


@pytest.fixture
def commands_dir(tmp_path: Path) -> Path:
    """Empty commands tree."""
    path = tmp_path / "commands"
    path.mkdir()
    return path


@pytest.fixture
def write_command(commands_dir):
    """Write a command module below ``commands_dir``.

    Without ``source`` a minimal command is written.
    """

    def _write(relpath: str, source: str = None, description: str = "") -> Path:
        path = commands_dir / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        if source is None:
            source = COMMAND_TEMPLATE.format(description=description)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An Astrical project with an empty config."""
    path = tmp_path / "site"
    path.mkdir()
    (path / "astrical.yml").write_text("name: site\n", encoding="utf-8")
    return path
