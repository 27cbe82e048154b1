"""``astrical module list`` - list the modules installed in a project.

Modules live in ``src/modules/<name>``; name, version and description are
read from each module's ``package.json`` when it has one.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from astrical.cli.base import BaseCommand
from astrical.cli.descriptor import CommandDescriptor
from astrical.cli.utils import get_console

DESCRIPTOR = CommandDescriptor(
    description="List installed modules",
    requires_project=True,
)

MODULES_DIR = Path("src") / "modules"


def read_module_info(module_dir: Path) -> dict[str, Any]:
    """Name, version and description of one module directory."""
    info = {"name": module_dir.name, "version": "unknown", "description": ""}
    package_json = module_dir / "package.json"
    if not package_json.is_file():
        return info

    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        info["description"] = f"(unreadable package.json: {e})"
        return info

    info["version"] = str(data.get("version", "unknown"))
    info["description"] = data.get("description", "")
    return info


class ModuleListCommand(BaseCommand):
    def run(self, options, context):
        if self.project_root is None:
            self.error("Project root not found.")

        modules_dir = self.project_root / MODULES_DIR
        module_dirs = (
            sorted(p for p in modules_dir.iterdir() if p.is_dir()) if modules_dir.is_dir() else []
        )
        if not module_dirs:
            self.info("No modules installed.")
            return 0

        from rich.table import Table

        table = Table(title="Installed modules")
        table.add_column("Name", style="cyan")
        table.add_column("Version")
        table.add_column("Description")
        for module_dir in module_dirs:
            info = read_module_info(module_dir)
            table.add_row(info["name"], info["version"], info["description"])

        get_console().print(table)
        return 0


COMMAND = ModuleListCommand
