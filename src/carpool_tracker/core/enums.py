"""Enums for the Carpool Tracker application."""

from enum import Enum


class TripDay(str, Enum):
    """Day of the week a trip happens on."""

    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    def __str__(self) -> str:
        return self.value


class ValidationErrorKind(str, Enum):
    """Kinds of value object validation failures."""

    INVALID_FORMAT = "invalid_format"


class PoolErrorKind(str, Enum):
    """Kinds of structural failures when building a pool."""

    EMPTY_PASSENGER_SET = "empty_passenger_set"


class CommandErrorKind(str, Enum):
    """Business-rule violations reported by commands."""

    INVALID_INDEX = "invalid_index"
    NO_COMMUTERS = "no_commuters"
    TRIP_DAY_MISMATCH = "trip_day_mismatch"
    DUPLICATE_POOL = "duplicate_pool"
    DUPLICATE_PASSENGER = "duplicate_passenger"
    HAS_ACTIVE_POOL = "has_active_pool"
    PARTIAL_DELETE = "partial_delete"
    NOTHING_TO_EDIT = "nothing_to_edit"
