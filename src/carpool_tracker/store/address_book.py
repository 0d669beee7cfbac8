"""
The authoritative in-memory collection of passengers and pools.

The AddressBook enforces the global invariants:
- no two passengers share a name (``is_same_passenger``);
- no two pools share driver, trip day and trip time (``is_same_pool``);
- a passenger referenced by a pool cannot be deleted.

It never cascades: deleting a pool leaves its passengers in place, and a
pooled passenger must be unpooled before it can be deleted.
"""

from typing import Callable, Iterable, List, Optional, Tuple

from ..domain.entities import Passenger, Pool
from ..utils.logging_config import get_logger

logger = get_logger('model')


class DuplicatePassengerError(Exception):
    """A passenger with the same name is already in the address book."""

    def __init__(self, passenger: Passenger):
        super().__init__(f"Passenger already exists: {passenger.name}")
        self.passenger = passenger


class DuplicatePoolError(Exception):
    """A pool with the same driver, trip day and trip time already exists."""

    def __init__(self, pool: Pool):
        super().__init__(
            f"Pool already exists: {pool.driver.name} on {pool.trip_day} at {pool.trip_time}"
        )
        self.pool = pool


class PassengerNotFoundError(LookupError):
    """The passenger is not in the address book."""

    def __init__(self, passenger: Passenger):
        super().__init__(f"Passenger not found: {passenger.name}")
        self.passenger = passenger


class PoolNotFoundError(LookupError):
    """The pool is not in the address book."""

    def __init__(self, pool: Pool):
        super().__init__(f"Pool not found: {pool.driver.name} on {pool.trip_day}")
        self.pool = pool


class AddressBook:
    """Ordered passengers and pools with identity and referential checks."""

    def __init__(
        self,
        passengers: Iterable[Passenger] = (),
        pools: Iterable[Pool] = (),
    ):
        self._passengers: List[Passenger] = []
        self._pools: List[Pool] = []
        self._version = 0

        for passenger in passengers:
            self.add_passenger(passenger)
        for pool in pools:
            self.add_pool(pool)

    @property
    def version(self) -> int:
        """Counter that increases on every mutation."""
        return self._version

    def _touch(self) -> None:
        self._version += 1

    # Passengers

    @property
    def passengers(self) -> Tuple[Passenger, ...]:
        return tuple(self._passengers)

    def has_passenger(self, passenger: Passenger) -> bool:
        """Whether a passenger with the same identity is present."""
        return any(p.is_same_passenger(passenger) for p in self._passengers)

    def add_passenger(self, passenger: Passenger) -> None:
        """
        Append a passenger.

        Raises:
            DuplicatePassengerError: If a passenger with the same name exists
        """
        if self.has_passenger(passenger):
            raise DuplicatePassengerError(passenger)
        self._passengers.append(passenger)
        self._touch()
        logger.debug(f"Added passenger {passenger.name}")

    def set_passenger(self, target: Passenger, edited: Passenger) -> None:
        """
        Replace ``target`` with ``edited`` in place.

        Raises:
            PassengerNotFoundError: If ``target`` is not present
            DuplicatePassengerError: If ``edited`` collides with another passenger
        """
        index = self._index_of_passenger(target)
        if not target.is_same_passenger(edited) and self.has_passenger(edited):
            raise DuplicatePassengerError(edited)
        self._passengers[index] = edited
        self._touch()
        logger.debug(f"Replaced passenger {target.name} with {edited.name}")

    def is_pooled(self, passenger: Passenger) -> bool:
        """Whether any pool contains the passenger."""
        return any(pool.contains(passenger) for pool in self._pools)

    def pools_containing(self, passenger: Passenger) -> Tuple[Pool, ...]:
        return tuple(pool for pool in self._pools if pool.contains(passenger))

    def delete_passenger(self, passenger: Passenger) -> bool:
        """
        Remove a passenger unless a pool still references it.

        Returns:
            False (and leaves the book unchanged) if any pool contains the
            passenger, True once the passenger has been removed

        Raises:
            PassengerNotFoundError: If the passenger is not present
        """
        index = self._index_of_passenger(passenger)
        if self.is_pooled(passenger):
            logger.debug(f"Refused to delete pooled passenger {passenger.name}")
            return False
        del self._passengers[index]
        self._touch()
        logger.debug(f"Deleted passenger {passenger.name}")
        return True

    def _index_of_passenger(self, passenger: Passenger) -> int:
        for index, existing in enumerate(self._passengers):
            if existing == passenger:
                return index
        raise PassengerNotFoundError(passenger)

    # Pools

    @property
    def pools(self) -> Tuple[Pool, ...]:
        return tuple(self._pools)

    def has_pool(self, pool: Pool) -> bool:
        """Whether a pool with the same identity is present."""
        return any(p.is_same_pool(pool) for p in self._pools)

    def add_pool(self, pool: Pool) -> None:
        """
        Append a pool.

        Raises:
            DuplicatePoolError: If a pool with the same identity exists
        """
        if self.has_pool(pool):
            raise DuplicatePoolError(pool)
        self._pools.append(pool)
        self._touch()
        logger.debug(f"Added pool for driver {pool.driver.name}")

    def delete_pool(self, pool: Pool) -> None:
        """
        Remove a pool. Its passengers stay in the address book.

        Raises:
            PoolNotFoundError: If the pool is not present
        """
        for index, existing in enumerate(self._pools):
            if existing == pool:
                del self._pools[index]
                self._touch()
                logger.debug(f"Deleted pool for driver {pool.driver.name}")
                return
        raise PoolNotFoundError(pool)

    # Listings

    def list_passengers(
        self, predicate: Optional[Callable[[Passenger], bool]] = None
    ) -> Tuple[Passenger, ...]:
        """Passengers accepted by the predicate, in insertion order."""
        if predicate is None:
            return self.passengers
        return tuple(p for p in self._passengers if predicate(p))

    def list_pools(
        self, predicate: Optional[Callable[[Pool], bool]] = None
    ) -> Tuple[Pool, ...]:
        """Pools accepted by the predicate, in insertion order."""
        if predicate is None:
            return self.pools
        return tuple(p for p in self._pools if predicate(p))

    # Whole-book operations

    def reset(self, other: "AddressBook") -> None:
        """Replace all contents with a copy of another address book's."""
        self._passengers = list(other.passengers)
        self._pools = list(other.pools)
        self._touch()

    def clear(self) -> None:
        """Remove every passenger and pool."""
        self._passengers = []
        self._pools = []
        self._touch()

    def copy(self) -> "AddressBook":
        book = AddressBook()
        book.reset(self)
        return book

    def __eq__(self, other) -> bool:
        if not isinstance(other, AddressBook):
            return NotImplemented
        return self.passengers == other.passengers and self.pools == other.pools

    def __repr__(self) -> str:
        return f"AddressBook(passengers={len(self._passengers)}, pools={len(self._pools)})"
