"""
Booking Domain Entities

Core business entities for the booking domain:
- Booking: Main aggregate representing a rental of inventory items
- BookingLine: One item priced for the booking's period
- BookingStatus: FSM states for booking lifecycle
- RevisionDiff: What an edit released, reserved and re-priced
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Iterable, List
from uuid import UUID, uuid4

from shared.domain.base import Aggregate, ValueObject
from shared.domain.exceptions import StateConflictError, ValidationError
from shared.domain.value_objects import DateRange, Money


class BookingStatus(Enum):
    """
    Booking Status Finite State Machine

    State transitions:
    - PENDING -> ACTIVE (hold activated: items reserved, invoice posted)
    - PENDING -> CANCELLED (hold dropped, nothing to reverse)
    - ACTIVE -> ACTIVE (edited: lines, dates and total replaced)
    - ACTIVE -> COMPLETED (items returned)
    - ACTIVE -> CANCELLED (items released, invoice refunded)
    Any state may be deleted outright, which reverses all effects.
    """
    PENDING = 'pending'
    ACTIVE = 'active'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


@dataclass(frozen=True)
class BookingLine(ValueObject):
    """An item on a booking with the daily rate frozen at pricing time"""
    item_id: UUID
    item_name: str
    daily_rate: Money
    days: int

    def __post_init__(self):
        if self.days < 1:
            raise ValidationError("A booking line covers at least one day", item_id=self.item_id)

    @property
    def total(self) -> Money:
        return self.daily_rate * self.days


def price_lines(items: Iterable, period: DateRange, currency: str) -> List[BookingLine]:
    """
    Snapshot the current daily rate of each item for the period

    ``items`` are objects exposing ``id``, ``name`` and ``daily_rate``.
    """
    days = period.days
    return [
        BookingLine(
            item_id=item.id,
            item_name=item.name,
            daily_rate=Money(item.daily_rate, currency),
            days=days,
        )
        for item in items
    ]


@dataclass(frozen=True)
class RevisionDiff(ValueObject):
    """Outcome of revising a booking"""
    released: frozenset
    reserved: frozenset
    old_party_id: UUID
    new_party_id: UUID
    old_total: Money
    new_total: Money

    @property
    def party_changed(self) -> bool:
        return self.old_party_id != self.new_party_id

    @property
    def total_delta(self) -> Decimal:
        return self.new_total.amount - self.old_total.amount


@dataclass(kw_only=True, eq=False)
class Booking(Aggregate):
    """
    Booking Aggregate Root

    Key invariants:
    - At least one line, and no item appears twice
    - total_amount is always the sum of the current line totals
    - Completed and Cancelled bookings are never edited
    """

    reference: str
    party_id: UUID
    period: DateRange
    lines: List[BookingLine]
    currency: str
    status: BookingStatus = BookingStatus.ACTIVE
    notes: str = ''
    created_by_id: int | None = None

    activated_at: datetime | None = None
    returned_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str = ''

    def __post_init__(self):
        self._check_lines(self.lines)

    @classmethod
    def open(
        cls,
        *,
        party_id: UUID,
        period: DateRange,
        lines: List[BookingLine],
        currency: str,
        hold: bool = False,
        notes: str = '',
        created_by_id: int | None = None,
    ) -> 'Booking':
        """Start a new booking, Active right away or Pending when held as a quote"""
        from apps.bookings.domain.events import BookingCreated

        booking = cls(
            reference=cls.generate_reference(),
            party_id=party_id,
            period=period,
            lines=list(lines),
            currency=currency,
            status=BookingStatus.PENDING if hold else BookingStatus.ACTIVE,
            notes=notes,
            created_by_id=created_by_id,
            activated_at=None if hold else datetime.now(),
        )
        booking.add_event(BookingCreated(
            aggregate_id=booking.id,
            booking_id=booking.id,
            reference=booking.reference,
            party_id=party_id,
            item_ids=booking.item_ids,
            total_amount=booking.total_amount,
            status=booking.status.value,
        ))
        return booking

    @staticmethod
    def generate_reference() -> str:
        """Human-readable booking number: BK{timestamp}{random}"""
        timestamp = datetime.now().strftime('%Y%m%d%H%M%S')
        return f"BK{timestamp}{uuid4().hex[:6].upper()}"

    @property
    def total_amount(self) -> Money:
        total = Money.zero(self.currency)
        for line in self.lines:
            total = total + line.total
        return total

    @property
    def item_ids(self) -> List[UUID]:
        return [line.item_id for line in self.lines]

    @property
    def days(self) -> int:
        return self.period.days

    @property
    def holds_items(self) -> bool:
        """Only Active bookings keep their items rented"""
        return self.status == BookingStatus.ACTIVE

    def revise(
        self,
        *,
        party_id: UUID,
        period: DateRange,
        lines: List[BookingLine],
        notes: str | None = None,
    ) -> RevisionDiff:
        """
        Replace party, period and lines in place (ACTIVE -> ACTIVE)

        Events: BookingRevised
        """
        if self.status in (BookingStatus.COMPLETED, BookingStatus.CANCELLED):
            raise StateConflictError(
                f"Cannot edit a {self.status.value} booking",
                booking_id=self.id,
                status=self.status.value,
            )
        self._check_lines(lines)

        from apps.bookings.domain.events import BookingRevised

        old_ids = set(self.item_ids)
        old_party_id = self.party_id
        old_total = self.total_amount

        self.party_id = party_id
        self.period = period
        self.lines = list(lines)
        if notes is not None:
            self.notes = notes

        diff = RevisionDiff(
            released=frozenset(old_ids - set(self.item_ids)),
            reserved=frozenset(self.item_ids),
            old_party_id=old_party_id,
            new_party_id=party_id,
            old_total=old_total,
            new_total=self.total_amount,
        )

        self.add_event(BookingRevised(
            aggregate_id=self.id,
            booking_id=self.id,
            old_party_id=diff.old_party_id,
            party_id=party_id,
            released=sorted(diff.released, key=str),
            reserved=sorted(diff.reserved, key=str),
            old_total=diff.old_total,
            new_total=diff.new_total,
        ))
        return diff

    def activate(self):
        """
        Activate a held booking (PENDING -> ACTIVE)

        Events: BookingActivated
        """
        if self.status != BookingStatus.PENDING:
            raise StateConflictError(
                f"Only pending bookings can be activated, this one is {self.status.value}",
                booking_id=self.id,
                status=self.status.value,
            )

        from apps.bookings.domain.events import BookingActivated

        self.status = BookingStatus.ACTIVE
        self.activated_at = datetime.now()
        self.add_event(BookingActivated(
            aggregate_id=self.id,
            booking_id=self.id,
            party_id=self.party_id,
            total_amount=self.total_amount,
        ))

    def mark_returned(self) -> bool:
        """
        Return the items (ACTIVE -> COMPLETED)

        Returning a completed booking again is tolerated and changes
        nothing. Returns True when the status actually changed.
        Events: BookingReturned
        """
        if self.status == BookingStatus.COMPLETED:
            return False
        if self.status != BookingStatus.ACTIVE:
            raise StateConflictError(
                f"Cannot return a {self.status.value} booking",
                booking_id=self.id,
                status=self.status.value,
            )

        from apps.bookings.domain.events import BookingReturned

        self.status = BookingStatus.COMPLETED
        self.returned_at = datetime.now()
        self.add_event(BookingReturned(
            aggregate_id=self.id,
            booking_id=self.id,
            item_ids=self.item_ids,
        ))
        return True

    def cancel(self, reason: str = '', refund_amount: Money | None = None):
        """
        Cancel booking (PENDING/ACTIVE -> CANCELLED)

        The record is kept. Events: BookingCancelled
        """
        if self.status not in (BookingStatus.PENDING, BookingStatus.ACTIVE):
            raise StateConflictError(
                f"Cannot cancel a {self.status.value} booking",
                booking_id=self.id,
                status=self.status.value,
            )

        from apps.bookings.domain.events import BookingCancelled

        old_status = self.status
        self.status = BookingStatus.CANCELLED
        self.cancelled_at = datetime.now()
        self.cancellation_reason = reason
        self.add_event(BookingCancelled(
            aggregate_id=self.id,
            booking_id=self.id,
            reason=reason,
            refund_amount=refund_amount,
            old_status=old_status.value,
        ))

    def mark_deleted(self, reversed_amount: Money):
        """Record that the booking and its ledger effects were removed"""
        from apps.bookings.domain.events import BookingDeleted

        self.add_event(BookingDeleted(
            aggregate_id=self.id,
            booking_id=self.id,
            reference=self.reference,
            party_id=self.party_id,
            item_ids=self.item_ids,
            reversed_amount=reversed_amount,
        ))

    @staticmethod
    def _check_lines(lines: List[BookingLine]):
        if not lines:
            raise ValidationError("A booking needs at least one item", field='items')
        item_ids = [line.item_id for line in lines]
        if len(set(item_ids)) != len(item_ids):
            raise ValidationError("An item can appear only once in a booking", field='items')

    def __str__(self):
        return f"Booking {self.reference} ({self.status.value})"

    def __repr__(self):
        return (
            f"Booking(id={self.id}, reference={self.reference}, "
            f"status={self.status.value}, period={self.period})"
        )
