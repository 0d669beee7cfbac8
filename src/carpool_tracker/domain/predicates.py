"""
Filter predicates for the passenger and pool listings.

Predicates are plain callables so callers may also pass a lambda; the
classes here exist for the filters the command line offers and compare
equal by their criteria.
"""

from dataclasses import dataclass
from typing import Callable, Tuple

from ..core.enums import TripDay
from .entities import Passenger, Pool
from .values import Price

PassengerPredicate = Callable[[Passenger], bool]
PoolPredicate = Callable[[Pool], bool]


def show_all(_item) -> bool:
    """Predicate that accepts everything."""
    return True


def contains_word_ignore_case(sentence: str, word: str) -> bool:
    """Whether ``sentence`` contains ``word`` as a whole word, ignoring case."""
    word = word.strip().lower()
    if not word:
        raise ValueError("Word parameter cannot be empty")
    if len(word.split()) > 1:
        raise ValueError("Word parameter should be a single word")
    return word in (w.lower() for w in sentence.split())


@dataclass(frozen=True)
class NameContainsKeywords:
    """Passenger name contains any of the keywords."""

    keywords: Tuple[str, ...]

    def __call__(self, passenger: Passenger) -> bool:
        return any(
            contains_word_ignore_case(str(passenger.name), keyword)
            for keyword in self.keywords
        )


@dataclass(frozen=True)
class AddressContainsKeywords:
    """Passenger address contains any of the keywords."""

    keywords: Tuple[str, ...]

    def __call__(self, passenger: Passenger) -> bool:
        return any(
            contains_word_ignore_case(str(passenger.address), keyword)
            for keyword in self.keywords
        )


@dataclass(frozen=True)
class TagContainsKeywords:
    """Passenger carries a tag equal to any of the keywords, ignoring case."""

    keywords: Tuple[str, ...]

    def __call__(self, passenger: Passenger) -> bool:
        wanted = {keyword.lower() for keyword in self.keywords}
        return any(tag.value.lower() in wanted for tag in passenger.tags)


@dataclass(frozen=True)
class TripDayMatches:
    """Passenger travels on the given day."""

    trip_day: TripDay

    def __call__(self, passenger: Passenger) -> bool:
        return passenger.trip_day == self.trip_day


@dataclass(frozen=True)
class PriceAtLeast:
    """Passenger pays at least the given price. Passengers without a price never match."""

    minimum: Price

    def __call__(self, passenger: Passenger) -> bool:
        return passenger.price is not None and passenger.price.amount >= self.minimum.amount


@dataclass(frozen=True)
class AllOf:
    """Conjunction of passenger predicates."""

    predicates: Tuple[PassengerPredicate, ...]

    def __call__(self, passenger: Passenger) -> bool:
        return all(predicate(passenger) for predicate in self.predicates)


@dataclass(frozen=True)
class DriverNameContainsKeywords:
    """Pool driver's name contains any of the keywords."""

    keywords: Tuple[str, ...]

    def __call__(self, pool: Pool) -> bool:
        return any(
            contains_word_ignore_case(str(pool.driver.name), keyword)
            for keyword in self.keywords
        )


@dataclass(frozen=True)
class PooledPassengerContainsKeywords:
    """Pool has a passenger whose name contains any of the keywords."""

    keywords: Tuple[str, ...]

    def __call__(self, pool: Pool) -> bool:
        name_matches = NameContainsKeywords(self.keywords)
        return any(name_matches(passenger) for passenger in pool.passengers)


@dataclass(frozen=True)
class AnyOf:
    """Disjunction of predicates."""

    predicates: Tuple[Callable[[object], bool], ...]

    def __call__(self, item) -> bool:
        return any(predicate(item) for predicate in self.predicates)
