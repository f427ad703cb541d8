"""
Booking Engine

Facade the presentation layer calls. Write operations are dispatched as
commands on the message bus. Reads go straight to the repository.

The engine performs no authorization: callers check the operator's role
before invoking delete-class operations.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, List
from uuid import UUID
import logging

from shared.application.message_bus import message_bus
from apps.bookings.application.command_handlers import (
    ActivateBookingCommand,
    AddPaymentCommand,
    CancelBookingCommand,
    CreateBookingCommand,
    DeleteBookingCommand,
    EditBookingCommand,
    RemoveLedgerEntryCommand,
    ReturnBookingCommand,
    register_command_handlers,
)
from apps.bookings.domain.cart import BookingCart
from apps.bookings.domain.entities import Booking
from apps.bookings.infrastructure.repositories import DjangoBookingRepository
from apps.ledger.models import LedgerEntry

logger = logging.getLogger(__name__)


def _user_id(user):
    if user is None or not getattr(user, 'is_authenticated', False):
        return None
    return user.pk


class BookingEngine:
    def __init__(self, bus=message_bus, booking_repo=None):
        self.bus = bus
        self.booking_repo = booking_repo or DjangoBookingRepository()

    def _dispatch(self, command):
        if not self.bus.has_command_handler(type(command)):
            register_command_handlers(self.bus, self.booking_repo)
        return self.bus.handle_command(command)

    # ===== Bookings =====

    def create(
        self,
        *,
        party_id: UUID,
        item_ids: Iterable[UUID],
        start_date: date,
        end_date: date,
        hold: bool = False,
        notes: str = '',
        created_by=None,
    ) -> Booking:
        return self._dispatch(CreateBookingCommand(
            party_id=party_id,
            item_ids=list(item_ids),
            start_date=start_date,
            end_date=end_date,
            hold=hold,
            notes=notes,
            created_by_id=_user_id(created_by),
        ))

    def edit(
        self,
        booking_id: UUID,
        *,
        party_id: UUID,
        item_ids: Iterable[UUID],
        start_date: date,
        end_date: date,
        notes: str | None = None,
    ) -> Booking:
        return self._dispatch(EditBookingCommand(
            booking_id=booking_id,
            party_id=party_id,
            item_ids=list(item_ids),
            start_date=start_date,
            end_date=end_date,
            notes=notes,
        ))

    def create_from_cart(self, cart: BookingCart, *, hold: bool = False, notes: str = '', created_by=None) -> Booking:
        cart.validate()
        return self.create(
            party_id=cart.party_id,
            item_ids=cart.item_ids,
            start_date=cart.period.start_date,
            end_date=cart.period.end_date,
            hold=hold,
            notes=notes,
            created_by=created_by,
        )

    def edit_from_cart(self, cart: BookingCart, booking_id: UUID | None = None, *, notes: str | None = None) -> Booking:
        cart.validate()
        return self.edit(
            booking_id or cart.booking_id,
            party_id=cart.party_id,
            item_ids=cart.item_ids,
            start_date=cart.period.start_date,
            end_date=cart.period.end_date,
            notes=notes,
        )

    def activate(self, booking_id: UUID, *, created_by=None) -> Booking:
        return self._dispatch(ActivateBookingCommand(booking_id=booking_id, created_by_id=_user_id(created_by)))

    def return_booking(self, booking_id: UUID) -> Booking:
        return self._dispatch(ReturnBookingCommand(booking_id=booking_id))

    def cancel(self, booking_id: UUID, reason: str = '', *, created_by=None) -> Booking:
        return self._dispatch(CancelBookingCommand(
            booking_id=booking_id,
            reason=reason,
            created_by_id=_user_id(created_by),
        ))

    def delete(self, booking_id: UUID) -> None:
        self._dispatch(DeleteBookingCommand(booking_id=booking_id))

    def get(self, booking_id: UUID) -> Booking:
        return self.booking_repo.get_by_id(booking_id)

    def list(self, status: str | None = None, party_id: UUID | None = None) -> List[Booking]:
        return self.booking_repo.list(status=status, party_id=party_id)

    # ===== Ledger =====

    def add_payment(
        self,
        *,
        party_id: UUID,
        amount: Decimal,
        method: str = LedgerEntry.Method.CASH,
        entry_date: date | None = None,
        description: str = '',
        created_by=None,
    ) -> LedgerEntry:
        return self._dispatch(AddPaymentCommand(
            party_id=party_id,
            amount=amount,
            method=method,
            entry_date=entry_date,
            description=description,
            created_by_id=_user_id(created_by),
        ))

    def remove_entry(self, entry_id: UUID) -> None:
        self._dispatch(RemoveLedgerEntryCommand(entry_id=entry_id))


booking_engine = BookingEngine()
