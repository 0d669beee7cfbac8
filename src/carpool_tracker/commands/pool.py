"""Commands that create, remove and filter pools."""

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple

from ..core.enums import CommandErrorKind, TripDay
from ..domain.entities import Driver, Passenger, Pool
from ..domain.predicates import PoolPredicate
from ..domain.values import Tag, TripTime
from ..store.model import Model
from ..utils.logging_config import get_logger
from .base import (
    MESSAGE_INVALID_PASSENGER_DISPLAYED_INDEX,
    MESSAGE_INVALID_POOL_DISPLAYED_INDEX,
    Command,
    CommandError,
    CommandResult,
    Index,
    resolve_index,
    unique_indexes,
)

logger = get_logger('commands')

# Passengers further than this from the pool time trigger a warning
MAX_TIME_DIFFERENCE = 15


@dataclass(frozen=True)
class PoolCommand(Command):
    """Pools the selected passengers together with a driver."""

    COMMAND_WORD = "pool"
    MESSAGE_USAGE = (
        "pool: Pools commuters together with a driver. Parameters: "
        "--name DRIVER_NAME --phone DRIVER_PHONE --day TRIP_DAY --time TRIP_TIME "
        "--commuter INDEX [--commuter INDEX]... [--tag TAG]...\n"
        "Example: pool --name Florence Lee --phone 98765432 --day monday --time 1930 "
        "--commuter 1 --commuter 4 --tag female"
    )
    MESSAGE_NO_COMMUTERS = "No commuters were selected."
    MESSAGE_POOL_SUCCESS = "Successfully created pool: {}"
    MESSAGE_POOL_SUCCESS_WITH_WARNING = (
        "Successfully created pool: {}.\n"
        "However, note that you have passengers with time differences with the pool "
        f"time of more than {MAX_TIME_DIFFERENCE} minutes."
    )
    MESSAGE_DUPLICATE_POOL = "This pool already exists in the address book"
    MESSAGE_TRIPDAY_MISMATCH = (
        "One of the passengers specified has a trip day that does not match "
        "this pool driver's trip day"
    )

    driver: Driver
    passenger_indexes: Tuple[Index, ...]
    trip_day: TripDay
    trip_time: TripTime
    tags: FrozenSet[Tag] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "passenger_indexes", unique_indexes(self.passenger_indexes))
        object.__setattr__(self, "tags", frozenset(self.tags))

    def _passengers_from_indexes(self, model: Model) -> Tuple[Passenger, ...]:
        last_shown = model.filtered_passengers()

        passengers = tuple(
            resolve_index(last_shown, index, MESSAGE_INVALID_PASSENGER_DISPLAYED_INDEX)
            for index in self.passenger_indexes
        )

        for passenger in passengers:
            if passenger.trip_day != self.trip_day:
                logger.warning(
                    f"Trip day mismatch: {passenger.name} travels on "
                    f"{passenger.trip_day}, pool is on {self.trip_day}"
                )
                raise CommandError(
                    self.MESSAGE_TRIPDAY_MISMATCH, CommandErrorKind.TRIP_DAY_MISMATCH
                )

        return passengers

    def _has_time_difference(self, passengers: Tuple[Passenger, ...]) -> bool:
        return any(
            passenger.trip_time.minutes_difference(self.trip_time) > MAX_TIME_DIFFERENCE
            for passenger in passengers
        )

    def execute(self, model: Model) -> CommandResult:
        if not self.passenger_indexes:
            raise CommandError(self.MESSAGE_NO_COMMUTERS, CommandErrorKind.NO_COMMUTERS)

        passengers = self._passengers_from_indexes(model)
        should_warn = self._has_time_difference(passengers)

        to_add = Pool(self.driver, self.trip_day, self.trip_time, passengers, self.tags)

        if model.has_pool(to_add):
            logger.warning(f"Refused duplicate pool for driver {self.driver.name}")
            raise CommandError(self.MESSAGE_DUPLICATE_POOL, CommandErrorKind.DUPLICATE_POOL)

        model.add_pool(to_add)
        logger.info(
            f"Created pool for driver {self.driver.name} with {len(passengers)} "
            f"passenger(s){' (time warning)' if should_warn else ''}"
        )

        message = self.MESSAGE_POOL_SUCCESS_WITH_WARNING if should_warn else self.MESSAGE_POOL_SUCCESS
        return CommandResult(message.format(to_add))


@dataclass(frozen=True)
class UnpoolCommand(Command):
    """Removes a displayed pool. Its passengers stay in the address book."""

    COMMAND_WORD = "unpool"
    MESSAGE_USAGE = (
        "unpool: Removes the pool identified by the index number used in the "
        "displayed pool list.\n"
        "Parameters: INDEX (must be a positive integer)\n"
        "Example: unpool 1"
    )
    MESSAGE_UNPOOL_SUCCESS = "Removed pool: {}"

    index: Index

    def execute(self, model: Model) -> CommandResult:
        last_shown = model.filtered_pools()
        pool_to_remove = resolve_index(last_shown, self.index, MESSAGE_INVALID_POOL_DISPLAYED_INDEX)

        model.delete_pool(pool_to_remove)
        logger.info(f"Removed pool for driver {pool_to_remove.driver.name}")
        return CommandResult(self.MESSAGE_UNPOOL_SUCCESS.format(pool_to_remove))


@dataclass(frozen=True)
class FindPoolCommand(Command):
    """Shows only the pools accepted by a predicate."""

    COMMAND_WORD = "findpool"
    MESSAGE_USAGE = (
        "findpool: Finds pools whose driver or passengers match any of the keywords.\n"
        "Parameters: [--driver KEYWORD]... [--passenger KEYWORD]...\n"
        "Example: findpool --passenger alice"
    )
    MESSAGE_POOLS_LISTED_OVERVIEW = "{} pools listed!"

    predicate: PoolPredicate

    def execute(self, model: Model) -> CommandResult:
        model.update_pool_filter(self.predicate)
        count = len(model.filtered_pools())
        return CommandResult(self.MESSAGE_POOLS_LISTED_OVERVIEW.format(count))
