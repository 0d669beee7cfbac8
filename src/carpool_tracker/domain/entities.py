"""
Entities of the carpool domain: drivers, passengers and pools.

All entities are immutable. Re-assigning a driver or retagging a passenger
produces a new value; the store swaps the old value for the new one.

Two notions of equality are used throughout:
- full equality (``==``): every field matches, including driver and tags;
- identity equality (``is_same_passenger`` / ``is_same_pool``): the weaker
  check used for duplicate detection.
"""

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Optional, Tuple, Union

from ..core.enums import PoolErrorKind, TripDay
from .values import Address, Name, Phone, Price, Tag, TripTime


NO_ASSIGNED_DRIVER = "No driver assigned to this passenger."


class PoolConstructionError(ValueError):
    """Raised when a pool is built from structurally invalid parts."""

    def __init__(self, message: str, kind: PoolErrorKind):
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class Driver:
    """The person driving a pool's vehicle."""

    name: Name
    phone: Phone

    def is_same_driver(self, other: Optional["Driver"]) -> bool:
        """Identity check by name only."""
        return other is not None and other.name == self.name

    def __str__(self) -> str:
        return f"{self.name}; Phone: {self.phone}"


@dataclass(frozen=True)
class Unassigned:
    """No driver has been assigned to the passenger."""

    def __str__(self) -> str:
        return NO_ASSIGNED_DRIVER


@dataclass(frozen=True)
class Assigned:
    """A driver has been assigned to the passenger."""

    driver: Driver

    def __str__(self) -> str:
        return str(self.driver)


DriverAssignment = Union[Unassigned, Assigned]

UNASSIGNED = Unassigned()


def _freeze_tags(tags: Iterable[Tag]) -> FrozenSet[Tag]:
    return tags if isinstance(tags, frozenset) else frozenset(tags)


@dataclass(frozen=True)
class Passenger:
    """A rider tracked by the address book."""

    name: Name
    phone: Phone
    address: Address
    trip_day: TripDay
    trip_time: TripTime
    tags: FrozenSet[Tag] = frozenset()
    driver: DriverAssignment = UNASSIGNED
    price: Optional[Price] = None

    def __post_init__(self):
        # Normalise any iterable of tags into a frozenset so equality is set-based
        object.__setattr__(self, "tags", _freeze_tags(self.tags))

    @property
    def assigned_driver(self) -> Optional[Driver]:
        """The assigned driver, or None when unassigned."""
        if isinstance(self.driver, Assigned):
            return self.driver.driver
        return None

    @property
    def driver_description(self) -> str:
        """Human-readable driver, with a placeholder when none is assigned."""
        return str(self.driver)

    def is_same_passenger(self, other: Optional["Passenger"]) -> bool:
        """
        Return True if both passengers have the same name.

        This is the weaker notion of equality used to detect duplicates.
        """
        if other is self:
            return True
        return other is not None and other.name == self.name

    def with_driver(self, driver: Driver) -> "Passenger":
        """Return a copy of this passenger with the given driver assigned."""
        return replace(self, driver=Assigned(driver))

    def without_driver(self) -> "Passenger":
        """Return a copy of this passenger with no driver assigned."""
        return replace(self, driver=UNASSIGNED)

    def with_tags(self, tags: Iterable[Tag]) -> "Passenger":
        """Return a copy of this passenger carrying exactly the given tags."""
        return replace(self, tags=frozenset(tags))

    def __str__(self) -> str:
        parts = [
            str(self.name),
            f"Phone: {self.phone}",
            f"Address: {self.address}",
            f"Trip Day: {self.trip_day}",
            f"Trip Time: {self.trip_time}",
            f"Driver: {self.driver_description}",
        ]
        if self.price is not None:
            parts.append(f"Price: ${self.price}")
        if self.tags:
            parts.append("Tags: " + "".join(str(tag) for tag in sorted_tags(self.tags)))
        return "; ".join(parts)


@dataclass(frozen=True)
class Pool:
    """A driver grouped with one or more passengers for a trip day and time."""

    driver: Driver
    trip_day: TripDay
    trip_time: TripTime
    passengers: Tuple[Passenger, ...]
    tags: FrozenSet[Tag] = field(default_factory=frozenset)

    def __post_init__(self):
        passengers = tuple(self.passengers)
        if not passengers:
            raise PoolConstructionError(
                "A pool must contain at least one passenger",
                PoolErrorKind.EMPTY_PASSENGER_SET,
            )
        object.__setattr__(self, "passengers", passengers)
        object.__setattr__(self, "tags", _freeze_tags(self.tags))

    def is_same_pool(self, other: Optional["Pool"]) -> bool:
        """
        Return True if both pools share driver, trip day and trip time.

        Passengers and tags are ignored.
        """
        if other is self:
            return True
        return (
            other is not None
            and other.driver == self.driver
            and other.trip_day == self.trip_day
            and other.trip_time == self.trip_time
        )

    def contains(self, passenger: Passenger) -> bool:
        """Whether the passenger is a member of this pool (full equality)."""
        return passenger in self.passengers

    def with_passengers(self, passengers: Iterable[Passenger]) -> "Pool":
        """Return a pool sharing driver, day, time and tags with new members."""
        return replace(self, passengers=tuple(passengers))

    @property
    def passenger_names(self) -> str:
        return ", ".join(str(p.name) for p in self.passengers)

    def __str__(self) -> str:
        text = (
            f"Driver: {self.driver}; Trip Day: {self.trip_day}; "
            f"Trip Time: {self.trip_time}; Passengers: {self.passenger_names}"
        )
        if self.tags:
            text += "; Tags: " + "".join(str(tag) for tag in sorted_tags(self.tags))
        return text


def sorted_tags(tags: Iterable[Tag]) -> Tuple[Tag, ...]:
    """Tags in a stable display order."""
    return tuple(sorted(tags, key=lambda tag: tag.value))
