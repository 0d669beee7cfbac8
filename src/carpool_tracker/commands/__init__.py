"""Command layer: discrete operations validated against the model."""

from .base import Command, CommandError, CommandResult, Index
from .general import ExitCommand, HelpCommand
from .passenger import (
    AddCommand,
    ClearCommand,
    DeleteCommand,
    EditCommand,
    EditPassengerDescriptor,
    FindCommand,
    ListCommand,
)
from .pool import FindPoolCommand, PoolCommand, UnpoolCommand

ALL_COMMANDS = (
    AddCommand,
    EditCommand,
    DeleteCommand,
    FindCommand,
    ListCommand,
    ClearCommand,
    PoolCommand,
    UnpoolCommand,
    FindPoolCommand,
    HelpCommand,
    ExitCommand,
)

__all__ = [
    "ALL_COMMANDS",
    "AddCommand",
    "ClearCommand",
    "Command",
    "CommandError",
    "CommandResult",
    "DeleteCommand",
    "EditCommand",
    "EditPassengerDescriptor",
    "ExitCommand",
    "FindCommand",
    "FindPoolCommand",
    "HelpCommand",
    "Index",
    "ListCommand",
    "PoolCommand",
    "UnpoolCommand",
]
