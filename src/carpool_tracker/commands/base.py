"""Shared command types: indexes, results, failures and the Command base."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple, TypeVar

from ..core.enums import CommandErrorKind
from ..store.model import Model

T = TypeVar("T")

MESSAGE_INVALID_PASSENGER_DISPLAYED_INDEX = "The passenger index provided is invalid"
MESSAGE_INVALID_POOL_DISPLAYED_INDEX = "The pool index provided is invalid"


class CommandError(Exception):
    """A business rule refused the command. The message is shown to the user."""

    def __init__(self, message: str, kind: CommandErrorKind):
        super().__init__(message)
        self.message = message
        self.kind = kind


@dataclass(frozen=True, order=True)
class Index:
    """A 1-based position in a displayed list."""

    one_based: int

    def __post_init__(self):
        if isinstance(self.one_based, bool) or not isinstance(self.one_based, int):
            raise TypeError("Index must be an integer")
        if self.one_based < 1:
            raise ValueError("Index must be a positive integer")

    @property
    def zero_based(self) -> int:
        return self.one_based - 1

    def __str__(self) -> str:
        return str(self.one_based)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a successful command."""

    feedback: str
    show_help: bool = False
    should_exit: bool = False


class Command(ABC):
    """A single-shot operation against the model."""

    COMMAND_WORD = ""
    MESSAGE_USAGE = ""

    @abstractmethod
    def execute(self, model: Model) -> CommandResult:
        """
        Run the command.

        Raises:
            CommandError: If a business rule refuses the command
        """


def unique_indexes(indexes: Iterable[Index]) -> Tuple[Index, ...]:
    """Drop repeated indexes, keeping the first occurrence of each."""
    return tuple(dict.fromkeys(indexes))


def resolve_index(snapshot: Sequence[T], index: Index, message: str) -> T:
    """
    Look up a 1-based index in a frozen snapshot of a displayed list.

    Raises:
        CommandError: INVALID_INDEX when the index is past the end
    """
    if index.zero_based >= len(snapshot):
        raise CommandError(message, CommandErrorKind.INVALID_INDEX)
    return snapshot[index.zero_based]


def join_names(items) -> str:
    """Comma-separated names of passengers (or anything with a ``name``)."""
    return ", ".join(str(item.name) for item in items)
