"""
Validated immutable value objects.

Every value type checks its input on construction and raises ValidationError
when the input does not match the domain rule. Equality and hashing are
structural (field-wise), provided by frozen dataclasses.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Union

from ..core.enums import TripDay, ValidationErrorKind


class ValidationError(ValueError):
    """Raised when raw input does not satisfy a value object's constraints."""

    def __init__(
        self,
        message: str,
        kind: ValidationErrorKind = ValidationErrorKind.INVALID_FORMAT,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message


_NAME_PATTERN = re.compile(r"^[^\W_]+(?: +[^\W_]+)*$")
_PHONE_PATTERN = re.compile(r"^\d{3,15}$")
_TAG_PATTERN = re.compile(r"^[^\W_]{1,30}$")
_TRIP_TIME_PATTERN = re.compile(r"^(\d{2})(\d{2})$")


@dataclass(frozen=True)
class Name:
    """A person's name: letters, digits and spaces, never blank."""

    MESSAGE_CONSTRAINTS = (
        "Names should only contain alphanumeric characters and spaces, "
        "and it should not be blank"
    )

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not _NAME_PATTERN.match(self.value):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Phone:
    """A phone number made of digits only."""

    MESSAGE_CONSTRAINTS = (
        "Phone numbers should only contain numbers, and it should be "
        "between 3 and 15 digits long"
    )

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not _PHONE_PATTERN.match(self.value):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Address:
    """A free-form pick-up address."""

    MESSAGE_CONSTRAINTS = "Addresses can take any values, and it should not be blank"

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value or self.value[0].isspace():
            raise ValidationError(self.MESSAGE_CONSTRAINTS)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Tag:
    """A short alphanumeric label attached to a passenger or a pool."""

    MESSAGE_CONSTRAINTS = "Tags should be alphanumeric and at most 30 characters long"

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not _TAG_PATTERN.match(self.value):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)

    def __str__(self) -> str:
        return f"[{self.value}]"


@dataclass(frozen=True)
class Price:
    """The fare a passenger pays: non-negative, at most two decimal places."""

    MESSAGE_CONSTRAINTS = (
        "Price should be a non-negative number with at most 2 decimal places"
    )

    amount: Decimal

    def __post_init__(self):
        if not isinstance(self.amount, Decimal) or not self.amount.is_finite():
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        if self.amount < 0 or self.amount.normalize().as_tuple().exponent < -2:
            raise ValidationError(self.MESSAGE_CONSTRAINTS)

    @classmethod
    def parse(cls, text: Union[str, int, float]) -> "Price":
        """Build a Price from text such as ``"2.34"``."""
        try:
            amount = Decimal(str(text).strip())
        except InvalidOperation:
            raise ValidationError(cls.MESSAGE_CONSTRAINTS)
        return cls(amount)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True, order=True)
class TripTime:
    """A 24-hour time of day, written ``HHMM``."""

    MESSAGE_CONSTRAINTS = (
        "Trip time should be a 24-hour time in the format HHMM, e.g. 1930"
    )

    hour: int
    minute: int

    def __post_init__(self):
        if not (0 <= self.hour <= 23 and 0 <= self.minute <= 59):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)

    @classmethod
    def parse(cls, text: str) -> "TripTime":
        """Build a TripTime from ``HHMM`` text."""
        match = _TRIP_TIME_PATTERN.match(text.strip()) if isinstance(text, str) else None
        if not match:
            raise ValidationError(cls.MESSAGE_CONSTRAINTS)
        return cls(int(match.group(1)), int(match.group(2)))

    @property
    def minutes_of_day(self) -> int:
        return self.hour * 60 + self.minute

    def minutes_difference(self, other: "TripTime") -> int:
        """
        Absolute difference in minutes between two times of the same day.

        The comparison does not wrap around midnight: 0000 and 2359 are
        1439 minutes apart.
        """
        return abs(self.minutes_of_day - other.minutes_of_day)

    def __str__(self) -> str:
        return f"{self.hour:02d}{self.minute:02d}"


def parse_trip_day(text: str) -> TripDay:
    """Parse a full weekday name, ignoring case and surrounding whitespace."""
    if isinstance(text, TripDay):
        return text
    try:
        return TripDay(text.strip().upper())
    except (ValueError, AttributeError):
        raise ValidationError(
            "Trip day should be a full weekday name, e.g. monday"
        )
