"""Commands that only talk to the presentation layer."""

from ..store.model import Model
from .base import Command, CommandResult


class HelpCommand(Command):
    """Asks the front end to show the usage of every command."""

    COMMAND_WORD = "help"
    MESSAGE_USAGE = "help: Shows program usage instructions."
    SHOWING_HELP_MESSAGE = "Opened help."

    def execute(self, model: Model) -> CommandResult:
        return CommandResult(self.SHOWING_HELP_MESSAGE, show_help=True)

    def __eq__(self, other) -> bool:
        return isinstance(other, HelpCommand)

    def __hash__(self) -> int:
        return hash(HelpCommand)


class ExitCommand(Command):
    """Asks the front end to end the session."""

    COMMAND_WORD = "exit"
    MESSAGE_USAGE = "exit: Exits the program."
    MESSAGE_EXIT_ACKNOWLEDGEMENT = "Exiting address book as requested ..."

    def execute(self, model: Model) -> CommandResult:
        return CommandResult(self.MESSAGE_EXIT_ACKNOWLEDGEMENT, should_exit=True)

    def __eq__(self, other) -> bool:
        return isinstance(other, ExitCommand)

    def __hash__(self) -> int:
        return hash(ExitCommand)
