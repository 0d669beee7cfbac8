"""Pydantic models for the address book JSON file."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field  # type: ignore

from ..domain.entities import Driver, Passenger, Pool
from ..domain.values import Address, Name, Phone, Price, Tag, TripTime, parse_trip_day
from ..store.address_book import AddressBook
from .errors import DataFormatError


class JsonAdaptedDriver(BaseModel):
    """JSON-friendly version of a Driver."""

    model_config = ConfigDict(extra="forbid")

    name: str
    phone: str

    @classmethod
    def from_model(cls, driver: Driver) -> "JsonAdaptedDriver":
        return cls(name=driver.name.value, phone=driver.phone.value)

    def to_model_type(self) -> Driver:
        """
        Convert to the domain Driver.

        Raises:
            ValidationError: If a field violates its value constraints
        """
        return Driver(Name(self.name), Phone(self.phone))


class JsonAdaptedPassenger(BaseModel):
    """JSON-friendly version of a Passenger."""

    model_config = ConfigDict(extra="forbid")

    name: str
    phone: str
    address: str
    trip_day: str
    trip_time: str
    tags: List[str] = Field(default_factory=list)
    price: Optional[str] = None
    driver: Optional[JsonAdaptedDriver] = None

    @classmethod
    def from_model(cls, passenger: Passenger) -> "JsonAdaptedPassenger":
        driver = passenger.assigned_driver
        return cls(
            name=passenger.name.value,
            phone=passenger.phone.value,
            address=passenger.address.value,
            trip_day=passenger.trip_day.value,
            trip_time=str(passenger.trip_time),
            tags=sorted(tag.value for tag in passenger.tags),
            price=str(passenger.price) if passenger.price is not None else None,
            driver=JsonAdaptedDriver.from_model(driver) if driver is not None else None,
        )

    def to_model_type(self) -> Passenger:
        """
        Convert to the domain Passenger.

        Raises:
            ValidationError: If a field violates its value constraints
        """
        passenger = Passenger(
            name=Name(self.name),
            phone=Phone(self.phone),
            address=Address(self.address),
            trip_day=parse_trip_day(self.trip_day),
            trip_time=TripTime.parse(self.trip_time),
            tags=frozenset(Tag(tag) for tag in self.tags),
            price=Price.parse(self.price) if self.price is not None else None,
        )
        if self.driver is not None:
            passenger = passenger.with_driver(self.driver.to_model_type())
        return passenger


class JsonAdaptedPool(BaseModel):
    """JSON-friendly version of a Pool. Passengers are stored by value."""

    model_config = ConfigDict(extra="forbid")

    driver: JsonAdaptedDriver
    trip_day: str
    trip_time: str
    passengers: List[JsonAdaptedPassenger]
    tags: List[str] = Field(default_factory=list)

    @classmethod
    def from_model(cls, pool: Pool) -> "JsonAdaptedPool":
        return cls(
            driver=JsonAdaptedDriver.from_model(pool.driver),
            trip_day=pool.trip_day.value,
            trip_time=str(pool.trip_time),
            passengers=[JsonAdaptedPassenger.from_model(p) for p in pool.passengers],
            tags=sorted(tag.value for tag in pool.tags),
        )

    def to_model_type(self) -> Pool:
        """
        Convert to the domain Pool.

        Raises:
            ValidationError: If a field violates its value constraints
            PoolConstructionError: If the pool has no passengers
        """
        return Pool(
            driver=self.driver.to_model_type(),
            trip_day=parse_trip_day(self.trip_day),
            trip_time=TripTime.parse(self.trip_time),
            passengers=tuple(p.to_model_type() for p in self.passengers),
            tags=frozenset(Tag(tag) for tag in self.tags),
        )


class JsonSerializableAddressBook(BaseModel):
    """The whole address book file."""

    model_config = ConfigDict(extra="forbid")

    passengers: List[JsonAdaptedPassenger] = Field(default_factory=list)
    pools: List[JsonAdaptedPool] = Field(default_factory=list)

    @classmethod
    def from_model(cls, book: AddressBook) -> "JsonSerializableAddressBook":
        return cls(
            passengers=[JsonAdaptedPassenger.from_model(p) for p in book.passengers],
            pools=[JsonAdaptedPool.from_model(p) for p in book.pools],
        )

    def to_model_type(self) -> AddressBook:
        """
        Rebuild the AddressBook.

        Each pool's members are re-resolved against the loaded passengers so
        the pools hold the very Passenger objects the book holds.

        Raises:
            ValidationError: If a field violates its value constraints
            PoolConstructionError: If a pool has no passengers
            DuplicatePassengerError: If two passengers share a name
            DuplicatePoolError: If two pools share driver, day and time
            DataFormatError: If a pool references an unknown passenger
        """
        book = AddressBook()
        for adapted in self.passengers:
            book.add_passenger(adapted.to_model_type())

        loaded: Dict[Passenger, Passenger] = {p: p for p in book.passengers}

        for adapted in self.pools:
            pool = adapted.to_model_type()
            members = []
            for passenger in pool.passengers:
                if passenger not in loaded:
                    raise DataFormatError(
                        f"Pool of driver {pool.driver.name} references unknown "
                        f"passenger {passenger.name}"
                    )
                members.append(loaded[passenger])
            book.add_pool(pool.with_passengers(members))

        return book
