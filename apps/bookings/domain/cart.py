"""
Booking Cart

In-memory working set (selected items, party, rental period) staged
before a booking is created or edited. Nothing here is persisted; the
engine turns a validated cart into a single create or edit call.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, List
from uuid import UUID

from shared.domain.exceptions import StateConflictError, ValidationError
from shared.domain.value_objects import DateRange, Money

from apps.bookings.domain.entities import Booking, BookingLine, BookingStatus


@dataclass(frozen=True)
class CartItem:
    item_id: UUID
    name: str
    daily_rate: Money


class BookingCart:
    def __init__(self, currency: str, party_id: UUID | None = None):
        self.currency = currency
        self.party_id = party_id
        self.period: DateRange | None = None
        self.booking_id: UUID | None = None
        self._items: Dict[UUID, CartItem] = {}

    def add(self, item) -> bool:
        """
        Stage an inventory item (anything with ``id``, ``name``, ``daily_rate``)

        Adding an item that is already staged is a no-op. Returns True
        when the item was added.
        """
        if item.id in self._items:
            return False
        self._items[item.id] = CartItem(
            item_id=item.id,
            name=item.name,
            daily_rate=Money(item.daily_rate, self.currency),
        )
        return True

    def remove(self, item_id: UUID) -> bool:
        return self._items.pop(item_id, None) is not None

    def clear(self):
        self._items.clear()
        self.party_id = None
        self.period = None
        self.booking_id = None

    def set_party(self, party_id: UUID):
        self.party_id = party_id

    def set_period(self, start_date: date, end_date: date):
        self.period = DateRange(start_date, end_date)

    @property
    def item_ids(self) -> List[UUID]:
        return list(self._items)

    @property
    def items(self) -> List[CartItem]:
        return list(self._items.values())

    @property
    def days(self) -> int:
        """Billable days for the staged period, 0 until a period is set"""
        if self.period is None:
            return 0
        return self.period.days

    @property
    def lines(self) -> List[BookingLine]:
        if self.period is None:
            return []
        return [
            BookingLine(
                item_id=item.item_id,
                item_name=item.name,
                daily_rate=item.daily_rate,
                days=self.days,
            )
            for item in self._items.values()
        ]

    @property
    def total(self) -> Money:
        total = Money.zero(self.currency)
        for line in self.lines:
            total = total + line.total
        return total

    def __len__(self):
        return len(self._items)

    def __contains__(self, item_id):
        return item_id in self._items

    def load_booking(self, booking: Booking):
        """Stage an existing booking for editing"""
        if booking.status in (BookingStatus.COMPLETED, BookingStatus.CANCELLED):
            raise StateConflictError(
                f"Cannot edit a {booking.status.value} booking",
                booking_id=booking.id,
                status=booking.status.value,
            )
        self.clear()
        self.currency = booking.currency
        self.booking_id = booking.id
        self.party_id = booking.party_id
        self.period = booking.period
        for line in booking.lines:
            self._items[line.item_id] = CartItem(
                item_id=line.item_id,
                name=line.item_name,
                daily_rate=line.daily_rate,
            )

    def validate(self):
        """Everything a create or edit call needs must be staged"""
        if self.party_id is None:
            raise ValidationError("Select a party", field='party')
        if self.period is None:
            raise ValidationError("Select a rental period", field='period')
        if not self._items:
            raise ValidationError("Select at least one item", field='items')
