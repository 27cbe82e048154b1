"""End-to-end tests for the astrical CLI entry point."""

import json

import pytest

from astrical import __version__
from astrical.cli import DEFAULT_COMMANDS_DIR, main
from astrical.cli.registry import load_commands


@pytest.fixture
def site(project_dir):
    """A project with two installed modules."""
    modules = project_dir / "src" / "modules"
    (modules / "blog").mkdir(parents=True)
    (modules / "blog" / "package.json").write_text(
        json.dumps({"name": "blog", "version": "1.4.0", "description": "Blog pages"})
    )
    (modules / "shop").mkdir()
    return project_dir


class TestBuiltinCommands:
    """Tests for the commands shipped in astrical/commands."""

    def test_discovered(self):
        names = [entry.name for entry in load_commands(DEFAULT_COMMANDS_DIR)]
        assert names == ["help", "module list"]

    def test_no_arguments_shows_help(self, capsys):
        assert main([]) == 0
        out = capsys.readouterr().out
        assert "Usage: astrical" in out
        assert "module list" in out
        assert "List installed modules" in out

    def test_help_flag(self, capsys):
        assert main(["--help"]) == 0
        assert "Commands:" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert f"astrical {__version__}" in capsys.readouterr().out

    def test_help_command(self, capsys):
        assert main(["help"]) == 0
        out = capsys.readouterr().out
        assert "Commands:" in out
        assert "help" in out

    def test_help_command_family(self, capsys):
        assert main(["help", "module"]) == 0
        out = capsys.readouterr().out
        assert "Commands for module:" in out
        assert "module list" in out

    def test_help_command_detail(self, capsys):
        assert main(["help", "module", "list"]) == 0
        out = capsys.readouterr().out
        assert "Usage: astrical module list" in out
        assert "List installed modules" in out

    def test_help_for_help(self, capsys):
        assert main(["help", "help"]) == 0
        out = capsys.readouterr().out
        assert "Usage: astrical help [...command]" in out
        assert "Arguments:" in out

    def test_help_unknown_command(self, capsys):
        assert main(["help", "bogus"]) == 1
        assert "Unknown command: bogus" in capsys.readouterr().err

    def test_unknown_subcommand(self, capsys):
        assert main(["module", "bogus"]) == 1
        assert "Unknown subcommand 'bogus' for 'module'" in capsys.readouterr().err


class TestModuleList:
    """Tests for `astrical module list`."""

    def test_lists_modules(self, site, capsys):
        assert main(["module", "list", "--root-dir", str(site)]) == 0
        out = capsys.readouterr().out
        assert "Installed modules" in out
        assert "blog" in out
        assert "1.4.0" in out
        assert "Blog pages" in out
        assert "shop" in out
        assert "unknown" in out

    def test_discovers_project_from_cwd(self, site, monkeypatch, capsys):
        monkeypatch.chdir(site / "src")
        assert main(["module", "list"]) == 0
        assert "blog" in capsys.readouterr().out

    def test_no_modules(self, project_dir, capsys):
        assert main(["module", "list", "--root-dir", str(project_dir)]) == 0
        assert "No modules installed." in capsys.readouterr().out

    def test_outside_project(self, capsys):
        assert main(["module", "list"]) == 1
        assert "requires to be run within an Astrical project" in capsys.readouterr().err

    def test_unreadable_package_json(self, site, capsys):
        (site / "src" / "modules" / "shop" / "package.json").write_text("{not json")
        assert main(["module", "list", "--root-dir", str(site)]) == 0
        assert "unreadable package.json" in capsys.readouterr().out


class TestCustomCommandsDir:
    """Tests for running main against another commands tree."""

    def test_dispatches_to_loaded_command(self, commands_dir, write_command, capsys):
        write_command(
            "deploy.py",
            """\
            from astrical.cli.base import BaseCommand
            from astrical.cli.descriptor import CommandDescriptor, argument, option

            DESCRIPTOR = CommandDescriptor(
                description="Deploy the site",
                args=[argument("target", required=True)],
                options=[option("--force", default=False)],
            )


            class DeployCommand(BaseCommand):
                def run(self, options, context):
                    self.info(repr(sorted(options.items())))


            COMMAND = DeployCommand
            """,
        )

        assert main(["deploy", "staging", "--force"], commands_dir=commands_dir) == 0
        out = capsys.readouterr().out
        assert (
            "[('debug', None), ('force', True), ('root_dir', None), ('target', 'staging')]" in out
        )

    def test_family_from_nested_files(self, commands_dir, write_command, capsys):
        write_command("db/migrate.py", description="Run migrations")
        write_command("db/seed.py", description="Seed data")

        assert main(["db", "seed"], commands_dir=commands_dir) == 0
        assert "ran db seed" in capsys.readouterr().out

    def test_broken_module_does_not_stop_cli(self, commands_dir, write_command, capsys):
        write_command("broken.py", "import does_not_exist_anywhere\n")
        write_command("good.py")

        assert main(["good"], commands_dir=commands_dir) == 0
        captured = capsys.readouterr()
        assert "ran good" in captured.out
        assert "Failed to load command" in captured.err

    def test_loads_given_directory(self, commands_dir, monkeypatch):
        loaded = []

        def fake_load(path):
            loaded.append(path)
            return []

        monkeypatch.setattr("astrical.cli.load_commands", fake_load)
        assert main([], commands_dir=commands_dir) == 0
        assert loaded == [commands_dir]

    def test_empty_commands_dir(self, commands_dir, capsys):
        assert main([], commands_dir=commands_dir) == 0
        assert "Commands:" in capsys.readouterr().out
