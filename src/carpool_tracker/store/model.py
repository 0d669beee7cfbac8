"""
The model the commands operate on: an AddressBook plus the current filtered
passenger and pool views.

Display indexes always refer to the filtered views. The views are returned
as tuples, so a command can hold a frozen snapshot while it mutates the book.
"""

from typing import Optional, Tuple

from ..domain.entities import Passenger, Pool
from ..domain.predicates import PassengerPredicate, PoolPredicate, show_all
from ..utils.logging_config import get_logger
from .address_book import AddressBook

logger = get_logger('model')

SHOW_ALL_PASSENGERS: PassengerPredicate = show_all
SHOW_ALL_POOLS: PoolPredicate = show_all


class Model:
    """AddressBook with filtered passenger and pool views."""

    def __init__(self, address_book: Optional[AddressBook] = None):
        self.address_book = address_book if address_book is not None else AddressBook()
        self._passenger_filter: PassengerPredicate = SHOW_ALL_PASSENGERS
        self._pool_filter: PoolPredicate = SHOW_ALL_POOLS

    # Filtered views

    def filtered_passengers(self) -> Tuple[Passenger, ...]:
        """Snapshot of the passengers currently displayed."""
        return self.address_book.list_passengers(self._passenger_filter)

    def filtered_pools(self) -> Tuple[Pool, ...]:
        """Snapshot of the pools currently displayed."""
        return self.address_book.list_pools(self._pool_filter)

    @property
    def passenger_filter(self) -> PassengerPredicate:
        return self._passenger_filter

    @property
    def pool_filter(self) -> PoolPredicate:
        return self._pool_filter

    def update_passenger_filter(self, predicate: PassengerPredicate) -> None:
        self._passenger_filter = predicate
        logger.debug(f"Passenger filter set to {predicate!r}")

    def update_pool_filter(self, predicate: PoolPredicate) -> None:
        self._pool_filter = predicate
        logger.debug(f"Pool filter set to {predicate!r}")

    def show_everything(self) -> None:
        self.update_passenger_filter(SHOW_ALL_PASSENGERS)
        self.update_pool_filter(SHOW_ALL_POOLS)

    # AddressBook delegation

    def has_passenger(self, passenger: Passenger) -> bool:
        return self.address_book.has_passenger(passenger)

    def add_passenger(self, passenger: Passenger) -> None:
        self.address_book.add_passenger(passenger)
        self.update_passenger_filter(SHOW_ALL_PASSENGERS)

    def set_passenger(self, target: Passenger, edited: Passenger) -> None:
        self.address_book.set_passenger(target, edited)

    def delete_passenger(self, passenger: Passenger) -> bool:
        return self.address_book.delete_passenger(passenger)

    def is_pooled(self, passenger: Passenger) -> bool:
        return self.address_book.is_pooled(passenger)

    def has_pool(self, pool: Pool) -> bool:
        return self.address_book.has_pool(pool)

    def add_pool(self, pool: Pool) -> None:
        self.address_book.add_pool(pool)
        self.update_pool_filter(SHOW_ALL_POOLS)

    def delete_pool(self, pool: Pool) -> None:
        self.address_book.delete_pool(pool)

    def clear(self) -> None:
        self.address_book.clear()
        self.show_everything()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return (
            self.address_book == other.address_book
            and self.filtered_passengers() == other.filtered_passengers()
            and self.filtered_pools() == other.filtered_pools()
        )
