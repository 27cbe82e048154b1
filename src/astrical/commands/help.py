"""``astrical help`` - show help for all commands or one of them."""

from astrical.cli.base import BaseCommand
from astrical.cli.descriptor import CommandDescriptor, argument

DESCRIPTOR = CommandDescriptor(
    description="Display help for a command",
    args=[argument("command...", description="Command to describe, e.g. 'module list'")],
)


class HelpCommand(BaseCommand):
    def run(self, options, context):
        context.show_help(options.get("command") or [])


COMMAND = HelpCommand
