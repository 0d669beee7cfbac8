"""Plain-text rendering of the filtered passenger and pool lists."""

from typing import Sequence

from .domain.entities import Passenger, Pool, sorted_tags

EMPTY_PASSENGERS = "No passengers to show."
EMPTY_POOLS = "No pools to show."


def _tag_text(tags) -> str:
    return "".join(str(tag) for tag in sorted_tags(tags))


def format_passenger(index: int, passenger: Passenger) -> str:
    """One numbered passenger entry; ``index`` is the 1-based display index."""
    lines = [
        f"{index}. {passenger.name}",
        f"   Phone: {passenger.phone}",
        f"   Address: {passenger.address}",
        f"   Trip: {passenger.trip_day} {passenger.trip_time}",
        f"   Driver: {passenger.driver_description}",
    ]
    if passenger.price is not None:
        lines.append(f"   Price: ${passenger.price}")
    if passenger.tags:
        lines.append(f"   Tags: {_tag_text(passenger.tags)}")
    return "\n".join(lines)


def format_pool(index: int, pool: Pool) -> str:
    """One numbered pool entry; ``index`` is the 1-based display index."""
    lines = [
        f"{index}. Driver: {pool.driver}",
        f"   Trip: {pool.trip_day} {pool.trip_time}",
        f"   Passengers: {pool.passenger_names}",
    ]
    if pool.tags:
        lines.append(f"   Tags: {_tag_text(pool.tags)}")
    return "\n".join(lines)


def format_passengers(passengers: Sequence[Passenger]) -> str:
    if not passengers:
        return EMPTY_PASSENGERS
    return "\n".join(format_passenger(i, p) for i, p in enumerate(passengers, start=1))


def format_pools(pools: Sequence[Pool]) -> str:
    if not pools:
        return EMPTY_POOLS
    return "\n".join(format_pool(i, p) for i, p in enumerate(pools, start=1))
