"""
Common Value Objects

Value objects used across the rental domains:
- Money: A non-negative monetary amount in a single currency
- DateRange: A rental period from start_date to end_date (both inclusive)
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from shared.domain.base import ValueObject
from shared.domain.exceptions import ValidationError

CENT = Decimal('0.01')
SECONDS_PER_DAY = 24 * 60 * 60


def to_decimal(value) -> Decimal:
    """Coerce ints, floats and strings to a two-place Decimal"""
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
        if amount.is_finite():
            return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError("Invalid amount", amount=str(value)) from exc
    raise ValidationError("Invalid amount", amount=str(value))


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object

    Amounts are kept as two-place Decimals. The whole system works in one
    configured currency, so arithmetic between currencies is rejected.
    """
    amount: Decimal
    currency: str

    def __post_init__(self):
        object.__setattr__(self, 'amount', to_decimal(self.amount))
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")
        if not self.currency:
            raise ValueError("Currency is required")

    @classmethod
    def zero(cls, currency: str) -> 'Money':
        return cls(Decimal('0'), currency)

    def __add__(self, other: 'Money') -> 'Money':
        """Add two money objects"""
        if not isinstance(other, Money):
            raise TypeError("Can only add Money to Money")
        if self.currency != other.currency:
            raise ValueError(f"Cannot add different currencies: {self.currency} and {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor) -> 'Money':
        """Multiply money by a quantity (e.g. a day-count)"""
        if not isinstance(factor, (int, Decimal)):
            raise TypeError("Can only multiply Money by int or Decimal")
        return Money(self.amount * factor, self.currency)

    def __str__(self):
        return f"{self.amount:,.2f} {self.currency}"

    def __repr__(self):
        return f"Money({self.amount}, '{self.currency}')"


def compute_days(start, end) -> int:
    """
    Number of rental days between two dates or datetimes

    The distance is rounded up to whole days and never drops below one:
    a same-day rental is charged as a full day.
    """
    seconds = abs(_as_datetime(end) - _as_datetime(start)).total_seconds()
    days = math.ceil(seconds / SECONDS_PER_DAY)
    return max(days, 1)


def _as_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Rental period value object

    start_date may equal end_date (a one-day rental) but must not
    come after it.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date is None or self.end_date is None:
            raise ValidationError(
                "Both start and end dates are required",
                start_date=self.start_date,
                end_date=self.end_date,
            )
        if self.start_date > self.end_date:
            raise ValidationError(
                f"Start date ({self.start_date}) must not be after end date ({self.end_date})",
                start_date=self.start_date,
                end_date=self.end_date,
            )

    @property
    def days(self) -> int:
        """Billable day-count for this period"""
        return compute_days(self.start_date, self.end_date)

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"
