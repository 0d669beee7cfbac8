"""Sample passengers and pools used to seed a fresh address book."""

from decimal import Decimal
from typing import Tuple

from .core.enums import TripDay
from .domain.entities import Driver, Passenger, Pool
from .domain.values import Address, Name, Phone, Price, Tag, TripTime
from .store.address_book import AddressBook


def _tags(*values: str):
    return frozenset(Tag(value) for value in values)


def sample_passengers() -> Tuple[Passenger, ...]:
    return (
        Passenger(
            Name("Alex Yeoh"), Phone("87438807"), Address("Blk 30 Geylang Street 29, #06-40"),
            TripDay.MONDAY, TripTime(8, 30), _tags("friends"), price=Price(Decimal("2.50")),
        ),
        Passenger(
            Name("Bernice Yu"), Phone("99272758"), Address("Blk 30 Lorong 3 Serangoon Gardens, #07-18"),
            TripDay.MONDAY, TripTime(8, 45), _tags("colleagues", "friends"),
        ),
        Passenger(
            Name("Charlotte Oliveiro"), Phone("93210283"), Address("Blk 11 Ang Mo Kio Street 74, #11-04"),
            TripDay.TUESDAY, TripTime(18, 0), _tags("neighbours"), price=Price(Decimal("4")),
        ),
        Passenger(
            Name("David Li"), Phone("91031282"), Address("Blk 436 Serangoon Gardens Street 26, #16-43"),
            TripDay.WEDNESDAY, TripTime(7, 15), _tags("family"),
        ),
        Passenger(
            Name("Irfan Ibrahim"), Phone("92492021"), Address("Blk 47 Tampines Street 20, #17-35"),
            TripDay.MONDAY, TripTime(9, 0), _tags("classmates"), price=Price(Decimal("1.80")),
        ),
        Passenger(
            Name("Roy Balakrishnan"), Phone("92624417"), Address("Blk 45 Aljunied Street 85, #11-31"),
            TripDay.FRIDAY, TripTime(17, 30), _tags("colleagues"),
        ),
    )


def sample_address_book() -> AddressBook:
    """A populated address book with one pool."""
    passengers = sample_passengers()
    book = AddressBook(passengers)

    driver = Driver(Name("Florence Lee"), Phone("98765432"))
    book.add_pool(
        Pool(driver, TripDay.MONDAY, TripTime(8, 30), (passengers[0], passengers[1]), _tags("morning"))
    )
    return book
