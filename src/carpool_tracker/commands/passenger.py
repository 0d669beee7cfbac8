"""Commands that add, edit, delete, filter and clear passengers."""

from dataclasses import dataclass, fields, replace
from typing import FrozenSet, List, Optional, Tuple

from ..core.enums import CommandErrorKind, TripDay
from ..domain.entities import DriverAssignment, Passenger
from ..domain.predicates import PassengerPredicate
from ..domain.values import Address, Name, Phone, Price, Tag, TripTime
from ..store.model import SHOW_ALL_PASSENGERS, Model
from ..utils.logging_config import get_logger
from .base import (
    MESSAGE_INVALID_PASSENGER_DISPLAYED_INDEX,
    Command,
    CommandError,
    CommandResult,
    Index,
    join_names,
    resolve_index,
    unique_indexes,
)

logger = get_logger('commands')


@dataclass(frozen=True)
class AddCommand(Command):
    """Adds a passenger to the address book."""

    COMMAND_WORD = "add"
    MESSAGE_USAGE = (
        "add: Adds a passenger to the address book. Parameters: "
        "--name NAME --phone PHONE --address ADDRESS --day TRIP_DAY --time TRIP_TIME "
        "[--price PRICE] [--tag TAG]...\n"
        "Example: add --name John Doe --phone 98765432 --address 311, Clementi Ave 2 "
        "--day monday --time 1930 --tag friends"
    )
    MESSAGE_SUCCESS = "New passenger added: {}"
    MESSAGE_DUPLICATE_PASSENGER = "This passenger already exists in the address book"

    passenger: Passenger

    def execute(self, model: Model) -> CommandResult:
        if model.has_passenger(self.passenger):
            logger.warning(f"Refused duplicate passenger {self.passenger.name}")
            raise CommandError(
                self.MESSAGE_DUPLICATE_PASSENGER, CommandErrorKind.DUPLICATE_PASSENGER
            )

        model.add_passenger(self.passenger)
        logger.info(f"Added passenger {self.passenger.name}")
        return CommandResult(self.MESSAGE_SUCCESS.format(self.passenger))


@dataclass(frozen=True)
class DeleteCommand(Command):
    """
    Deletes passengers identified by their displayed indexes.

    Passengers that still belong to a pool are not deleted. When only some of
    the targets are blocked the others are deleted anyway and the command
    fails with PARTIAL_DELETE; those deletions are not rolled back.
    """

    COMMAND_WORD = "delete"
    MESSAGE_USAGE = (
        "delete: Deletes the passengers identified by the index numbers used in the "
        "displayed passenger list.\n"
        "Parameters: INDEX [INDEX]... (must be positive integers)\n"
        "Example: delete 1 3"
    )
    MESSAGE_DELETE_PASSENGER_SUCCESS = "Deleted Passenger(s): {}"
    MESSAGE_DELETE_PASSENGER_FAIL_HAS_POOL = (
        "Failed to delete. One or more Pools contain Passenger(s): {}."
    )
    MESSAGE_DELETE_PASSENGER_FAIL_HAS_POOL_OTHERS_DELETED = (
        "Deleted Passenger(s): {}.\n"
        "However failed to delete some passengers as one or more Pools contain "
        "Passenger(s): {}."
    )

    target_indexes: Tuple[Index, ...]

    def __post_init__(self):
        indexes = unique_indexes(self.target_indexes)
        if not indexes:
            raise ValueError("DeleteCommand needs at least one index")
        object.__setattr__(self, "target_indexes", indexes)

    def execute(self, model: Model) -> CommandResult:
        last_shown = model.filtered_passengers()

        # Resolve everything before deleting anything
        targeted = [
            resolve_index(last_shown, index, MESSAGE_INVALID_PASSENGER_DISPLAYED_INDEX)
            for index in self.target_indexes
        ]

        deleted: List[Passenger] = []
        blocked: List[Passenger] = []
        for passenger in targeted:
            if model.delete_passenger(passenger):
                deleted.append(passenger)
            else:
                blocked.append(passenger)

        if blocked and not deleted:
            logger.warning(f"Delete blocked by pool membership: {join_names(blocked)}")
            raise CommandError(
                self.MESSAGE_DELETE_PASSENGER_FAIL_HAS_POOL.format(join_names(blocked)),
                CommandErrorKind.HAS_ACTIVE_POOL,
            )

        if blocked:
            logger.warning(
                f"Partial delete: deleted {join_names(deleted)}, "
                f"blocked {join_names(blocked)}"
            )
            raise CommandError(
                self.MESSAGE_DELETE_PASSENGER_FAIL_HAS_POOL_OTHERS_DELETED.format(
                    join_names(deleted), join_names(blocked)
                ),
                CommandErrorKind.PARTIAL_DELETE,
            )

        logger.info(f"Deleted passengers {join_names(deleted)}")
        return CommandResult(self.MESSAGE_DELETE_PASSENGER_SUCCESS.format(join_names(deleted)))


@dataclass(frozen=True)
class EditPassengerDescriptor:
    """The fields to change on a passenger. None means unchanged."""

    name: Optional[Name] = None
    phone: Optional[Phone] = None
    address: Optional[Address] = None
    trip_day: Optional[TripDay] = None
    trip_time: Optional[TripTime] = None
    tags: Optional[FrozenSet[Tag]] = None
    price: Optional[Price] = None
    driver: Optional[DriverAssignment] = None

    def __post_init__(self):
        if self.tags is not None and not isinstance(self.tags, frozenset):
            object.__setattr__(self, "tags", frozenset(self.tags))

    def is_any_field_edited(self) -> bool:
        return any(getattr(self, f.name) is not None for f in fields(self))

    def apply_to(self, passenger: Passenger) -> Passenger:
        changes = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }
        return replace(passenger, **changes)


@dataclass(frozen=True)
class EditCommand(Command):
    """
    Edits the details of a displayed passenger.

    A pooled passenger cannot be edited: pools hold their members by value,
    so the edited passenger would no longer match its pool.
    """

    COMMAND_WORD = "edit"
    MESSAGE_USAGE = (
        "edit: Edits the details of the passenger identified by the index number "
        "used in the displayed passenger list. Existing values will be overwritten.\n"
        "Parameters: INDEX [--name NAME] [--phone PHONE] [--address ADDRESS] "
        "[--day TRIP_DAY] [--time TRIP_TIME] [--price PRICE] [--tag TAG]... "
        "[--clear-tags] [--driver-name NAME --driver-phone PHONE] [--unassign-driver]\n"
        "Example: edit 1 --phone 91234567 --time 0830"
    )
    MESSAGE_EDIT_PASSENGER_SUCCESS = "Edited Passenger: {}"
    MESSAGE_NOT_EDITED = "At least one field to edit must be provided."
    MESSAGE_DUPLICATE_PASSENGER = "This passenger already exists in the address book."
    MESSAGE_PASSENGER_IN_POOL = (
        "Passenger {} is in one or more pools. Unpool them before editing."
    )

    index: Index
    descriptor: EditPassengerDescriptor

    def execute(self, model: Model) -> CommandResult:
        if not self.descriptor.is_any_field_edited():
            raise CommandError(self.MESSAGE_NOT_EDITED, CommandErrorKind.NOTHING_TO_EDIT)

        last_shown = model.filtered_passengers()
        target = resolve_index(last_shown, self.index, MESSAGE_INVALID_PASSENGER_DISPLAYED_INDEX)

        if model.is_pooled(target):
            logger.warning(f"Refused to edit pooled passenger {target.name}")
            raise CommandError(
                self.MESSAGE_PASSENGER_IN_POOL.format(target.name),
                CommandErrorKind.HAS_ACTIVE_POOL,
            )

        edited = self.descriptor.apply_to(target)
        if not target.is_same_passenger(edited) and model.has_passenger(edited):
            raise CommandError(
                self.MESSAGE_DUPLICATE_PASSENGER, CommandErrorKind.DUPLICATE_PASSENGER
            )

        model.set_passenger(target, edited)
        model.update_passenger_filter(SHOW_ALL_PASSENGERS)
        logger.info(f"Edited passenger {target.name}")
        return CommandResult(self.MESSAGE_EDIT_PASSENGER_SUCCESS.format(edited))


@dataclass(frozen=True)
class FindCommand(Command):
    """Shows only the passengers accepted by a predicate."""

    COMMAND_WORD = "find"
    MESSAGE_USAGE = (
        "find: Finds passengers matching all the given criteria. Keywords are "
        "case-insensitive whole words.\n"
        "Parameters: [--name KEYWORD]... [--address KEYWORD]... [--tag TAG]... "
        "[--day TRIP_DAY] [--min-price PRICE]\n"
        "Example: find --name alice bob --day monday"
    )
    MESSAGE_PASSENGERS_LISTED_OVERVIEW = "{} passengers listed!"

    predicate: PassengerPredicate

    def execute(self, model: Model) -> CommandResult:
        model.update_passenger_filter(self.predicate)
        count = len(model.filtered_passengers())
        return CommandResult(self.MESSAGE_PASSENGERS_LISTED_OVERVIEW.format(count))


class ListCommand(Command):
    """Clears every filter so all passengers and pools are shown."""

    COMMAND_WORD = "list"
    MESSAGE_USAGE = "list: Lists all passengers and pools."
    MESSAGE_SUCCESS = "Listed all passengers and pools"

    def execute(self, model: Model) -> CommandResult:
        model.show_everything()
        return CommandResult(self.MESSAGE_SUCCESS)

    def __eq__(self, other) -> bool:
        return isinstance(other, ListCommand)

    def __hash__(self) -> int:
        return hash(ListCommand)


class ClearCommand(Command):
    """Removes every passenger and pool."""

    COMMAND_WORD = "clear"
    MESSAGE_USAGE = "clear: Removes all passengers and pools."
    MESSAGE_SUCCESS = "Address book has been cleared!"

    def execute(self, model: Model) -> CommandResult:
        model.clear()
        logger.info("Cleared address book")
        return CommandResult(self.MESSAGE_SUCCESS)

    def __eq__(self, other) -> bool:
        return isinstance(other, ClearCommand)

    def __hash__(self) -> int:
        return hash(ClearCommand)
