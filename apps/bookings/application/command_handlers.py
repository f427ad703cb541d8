"""
Booking Command Handlers

These are the use cases of the booking engine. Each handler runs inside
one DjangoUnitOfWork, so item status, the booking record, ledger entries
and party balances change together or not at all.

Commands:
- CreateBookingCommand: Price items, reserve them and invoice the party
- EditBookingCommand: Replace lines/dates/party and rewrite the invoice
- ActivateBookingCommand: Turn a held (pending) booking into an active one
- ReturnBookingCommand: Complete a booking and release its items
- CancelBookingCommand: Cancel a booking, refunding its invoice
- DeleteBookingCommand: Remove a booking and reverse all its effects
- AddPaymentCommand: Record a payment from a party
- RemoveLedgerEntryCommand: Delete a standalone entry and reverse it

Every ledger append or delete is paired with exactly one balance
adjustment carrying the entry's balance delta (or its inverse).
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List
from uuid import UUID
import logging

from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import StateConflictError, ValidationError
from shared.domain.value_objects import DateRange, Money, to_decimal
from apps.bookings.domain.entities import Booking, BookingStatus, price_lines
from apps.bookings.domain.events import LedgerEntryRemoved, PaymentReceived
from apps.bookings.infrastructure.repositories import DjangoBookingRepository
from apps.configuration.services import current_currency
from apps.inventory.models import InventoryItem
from apps.inventory.services import inventory_registry
from apps.ledger.models import LedgerEntry
from apps.ledger.services import transaction_log
from apps.parties.services import party_ledger

logger = logging.getLogger(__name__)

ItemStatus = InventoryItem.Status


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking

    With ``hold=True`` the booking is stored as Pending: nothing is
    reserved and nothing is invoiced until it is activated.
    """
    party_id: UUID
    item_ids: List[UUID]
    start_date: date
    end_date: date
    hold: bool = False
    notes: str = ''
    created_by_id: int | None = None


@dataclass
class EditBookingCommand:
    """Command to replace a booking's party, items and dates in place"""
    booking_id: UUID
    party_id: UUID
    item_ids: List[UUID]
    start_date: date
    end_date: date
    notes: str | None = None


@dataclass
class ActivateBookingCommand:
    booking_id: UUID
    created_by_id: int | None = None


@dataclass
class ReturnBookingCommand:
    booking_id: UUID


@dataclass
class CancelBookingCommand:
    booking_id: UUID
    reason: str = ''
    created_by_id: int | None = None


@dataclass
class DeleteBookingCommand:
    booking_id: UUID


@dataclass
class AddPaymentCommand:
    """Command to record a payment from a party (lowers its balance)"""
    party_id: UUID
    amount: Decimal
    method: str = LedgerEntry.Method.CASH
    entry_date: date | None = None
    description: str = ''
    created_by_id: int | None = None


@dataclass
class RemoveLedgerEntryCommand:
    entry_id: UUID


# ===== Command Handlers =====

class BookingHandler:
    """
    Shared effects of the booking handlers

    Collaborators default to the module-level registry, ledger and log
    so tests can pass their own.
    """

    def __init__(
        self,
        booking_repo,
        inventory=inventory_registry,
        parties=party_ledger,
        ledger=transaction_log,
    ):
        self.booking_repo = booking_repo
        self.inventory = inventory
        self.parties = parties
        self.ledger = ledger

    def _load_items(self, item_ids: Iterable[UUID]) -> List[InventoryItem]:
        """Lock the items and return them in the requested order"""
        item_ids = list(item_ids)
        if not item_ids:
            raise ValidationError("A booking needs at least one item", field='items')
        if len(set(item_ids)) != len(item_ids):
            raise ValidationError("An item can appear only once in a booking", field='items')
        locked = self.inventory.lock(item_ids)
        return [locked[item_id] for item_id in item_ids]

    def _ensure_reservable(self, items: Iterable[InventoryItem]):
        for item in items:
            if item.is_deleted:
                raise StateConflictError("Item has been deleted", item_id=item.id)
            if item.status != ItemStatus.AVAILABLE:
                raise StateConflictError(
                    f"Item {item.name} is {item.status}",
                    item_id=item.id,
                    status=item.status,
                )

    def _reserve(self, item_ids: Iterable[UUID]):
        self.inventory.bulk_set_status(item_ids, ItemStatus.RENTED)

    def _release(self, item_ids: Iterable[UUID], booking_id: UUID):
        """
        Set rented items back to Available

        Items still claimed by another Active booking stay Rented.
        """
        item_ids = set(item_ids)
        if not item_ids:
            return
        claimed = self.booking_repo.active_claims(item_ids, exclude_booking_id=booking_id)
        rented = self.inventory.ids_with_status(item_ids - claimed, ItemStatus.RENTED)
        self.inventory.bulk_set_status(rented, ItemStatus.AVAILABLE)
        if claimed:
            logger.info(f"Kept {len(claimed)} items rented for other active bookings")

    def _post_invoice(self, booking: Booking, created_by_id: int | None = None) -> LedgerEntry:
        entry = self.ledger.append(
            party_id=booking.party_id,
            kind=LedgerEntry.Kind.INVOICE,
            amount=booking.total_amount.amount,
            booking_id=booking.id,
            description=f"Invoice for booking {booking.reference}",
            created_by_id=created_by_id,
        )
        self.parties.adjust_balance(booking.party_id, entry.balance_delta)
        return entry

    def _reverse_entry(self, entry: LedgerEntry):
        self.ledger.delete(entry.id)
        self.parties.adjust_balance(entry.party_id, -entry.balance_delta)


class CreateBookingHandler(BookingHandler):
    """
    Handler for CreateBooking command

    Strategy:
    1. Validate input before touching the database
    2. Start database transaction (atomic)
    3. Lock party and items (SELECT FOR UPDATE where supported)
    4. Check party standing, item availability and credit limit
    5. Snapshot rates into lines and save the Booking
    6. Mark items Rented, append the invoice, adjust the balance
    7. Commit, then publish events
    """

    def handle(self, command: CreateBookingCommand) -> Booking:
        logger.info(
            f"Creating booking for party {command.party_id}, "
            f"{len(command.item_ids)} items, dates {command.start_date} - {command.end_date}"
        )
        if command.party_id is None:
            raise ValidationError("A booking needs a party", field='party')
        period = DateRange(command.start_date, command.end_date)

        with DjangoUnitOfWork('create_booking') as uow:
            party = self.parties.get(command.party_id, lock=True, include_deleted=True)
            self.parties.ensure_can_transact(party)
            items = self._load_items(command.item_ids)
            currency = current_currency()

            booking = Booking.open(
                party_id=party.id,
                period=period,
                lines=price_lines(items, period, currency),
                currency=currency,
                hold=command.hold,
                notes=command.notes,
                created_by_id=command.created_by_id,
            )

            if not command.hold:
                self._ensure_reservable(items)
                self.parties.ensure_within_credit_limit(party, booking.total_amount.amount)

            self.booking_repo.save(booking)
            if not command.hold:
                self._reserve(booking.item_ids)
                self._post_invoice(booking, command.created_by_id)

            uow.collect_events(booking)

        logger.info(
            f"Booking created successfully: {booking.reference} "
            f"(ID: {booking.id}, status: {booking.status.value}, total: {booking.total_amount})"
        )
        return booking


class EditBookingHandler(BookingHandler):
    """
    Handler for EditBooking command

    Items dropped from an active booking go back to Available, every
    item on the new line set is Rented, and the booking's invoice is
    rewritten to the new total (moving to the new party if it changed).
    """

    def handle(self, command: EditBookingCommand) -> Booking:
        logger.info(f"Editing booking {command.booking_id}")
        period = DateRange(command.start_date, command.end_date)

        with DjangoUnitOfWork('edit_booking') as uow:
            booking = self.booking_repo.get_by_id(command.booking_id, lock=True)
            if booking.status in (BookingStatus.COMPLETED, BookingStatus.CANCELLED):
                raise StateConflictError(
                    f"Cannot edit a {booking.status.value} booking",
                    booking_id=booking.id,
                    status=booking.status.value,
                )

            party_changed = command.party_id != booking.party_id
            party = self.parties.get(command.party_id, lock=True, include_deleted=True)
            self.parties.ensure_can_transact(party, for_booking=party_changed)

            items = self._load_items(command.item_ids)
            lines = price_lines(items, period, booking.currency)
            was_active = booking.holds_items
            old_item_ids = set(booking.item_ids)

            invoice = None
            if was_active:
                self._ensure_reservable(item for item in items if item.id not in old_item_ids)
                invoice = self.ledger.invoice_for(booking.id, lock=True)
                new_total = sum((line.total.amount for line in lines), Decimal('0'))
                already_owed = invoice.amount if invoice is not None and not party_changed else Decimal('0')
                self.parties.ensure_within_credit_limit(party, new_total - already_owed)

            diff = booking.revise(
                party_id=party.id,
                period=period,
                lines=lines,
                notes=command.notes,
            )
            self.booking_repo.save(booking)

            if was_active:
                self._release(diff.released, booking.id)
                self._reserve(diff.reserved)
                self._rewrite_invoice(booking, invoice, diff)

            uow.collect_events(booking)

        logger.info(
            f"Booking {booking.reference} edited: total {diff.old_total} -> {diff.new_total}, "
            f"released {len(diff.released)} items"
        )
        return booking

    def _rewrite_invoice(self, booking: Booking, invoice: LedgerEntry | None, diff):
        if invoice is None:
            logger.warning(f"Active booking {booking.reference} had no invoice, posting one")
            self._post_invoice(booking, booking.created_by_id)
            return

        new_amount = diff.new_total.amount
        if diff.party_changed:
            self.parties.adjust_balance(invoice.party_id, -invoice.amount)
            self.parties.adjust_balance(booking.party_id, new_amount)
        else:
            self.parties.adjust_balance(booking.party_id, new_amount - invoice.amount)
        self.ledger.rewrite_invoice(invoice, amount=new_amount, party_id=booking.party_id)


class ActivateBookingHandler(BookingHandler):
    """Handler for activating a held booking (PENDING -> ACTIVE)"""

    def handle(self, command: ActivateBookingCommand) -> Booking:
        logger.info(f"Activating booking {command.booking_id}")

        with DjangoUnitOfWork('activate_booking') as uow:
            booking = self.booking_repo.get_by_id(command.booking_id, lock=True)
            if booking.status != BookingStatus.PENDING:
                raise StateConflictError(
                    f"Only pending bookings can be activated, this one is {booking.status.value}",
                    booking_id=booking.id,
                    status=booking.status.value,
                )
            party = self.parties.get(booking.party_id, lock=True, include_deleted=True)
            self.parties.ensure_can_transact(party)
            items = self._load_items(booking.item_ids)
            self._ensure_reservable(items)
            self.parties.ensure_within_credit_limit(party, booking.total_amount.amount)

            booking.activate()
            self.booking_repo.save(booking)
            self._reserve(booking.item_ids)
            self._post_invoice(booking, command.created_by_id)

            uow.collect_events(booking)

        logger.info(f"Booking {booking.reference} activated")
        return booking


class ReturnBookingHandler(BookingHandler):
    """Handler for returning a booking's items (ACTIVE -> COMPLETED). No ledger effect."""

    def handle(self, command: ReturnBookingCommand) -> Booking:
        logger.info(f"Returning booking {command.booking_id}")

        with DjangoUnitOfWork('return_booking') as uow:
            booking = self.booking_repo.get_by_id(command.booking_id, lock=True)
            changed = booking.mark_returned()
            self._release(booking.item_ids, booking.id)
            if changed:
                self.booking_repo.save(booking)
            uow.collect_events(booking)

        if changed:
            logger.info(f"Booking {booking.reference} completed")
        else:
            logger.info(f"Booking {booking.reference} was already completed")
        return booking


class CancelBookingHandler(BookingHandler):
    """
    Handler for cancelling a booking

    A pending booking is simply marked cancelled. An active one releases
    its items and gets a refund entry equal to its invoice, which brings
    the party balance back to where it was before the booking.
    """

    def handle(self, command: CancelBookingCommand) -> Booking:
        logger.info(f"Cancelling booking {command.booking_id}, reason: {command.reason}")

        with DjangoUnitOfWork('cancel_booking') as uow:
            booking = self.booking_repo.get_by_id(command.booking_id, lock=True)
            was_active = booking.holds_items

            refund = None
            invoice = self.ledger.invoice_for(booking.id, lock=True) if was_active else None
            if invoice is not None and invoice.amount > 0:
                refund = Money(invoice.amount, booking.currency)

            booking.cancel(command.reason, refund)
            self.booking_repo.save(booking)

            if was_active:
                self._release(booking.item_ids, booking.id)
            if refund is not None:
                entry = self.ledger.append(
                    party_id=invoice.party_id,
                    kind=LedgerEntry.Kind.REFUND,
                    amount=refund.amount,
                    booking_id=booking.id,
                    description=f"Refund for cancelled booking {booking.reference}",
                    created_by_id=command.created_by_id,
                )
                self.parties.adjust_balance(entry.party_id, entry.balance_delta)

            uow.collect_events(booking)

        logger.info(f"Booking {booking.reference} cancelled successfully")
        return booking


class DeleteBookingHandler(BookingHandler):
    """
    Handler for deleting a booking

    Full reversal: items released, every ledger entry tied to the booking
    removed with its balance effect undone, then the record deleted.
    Payments are posted against the party, not the booking, so they stay.
    """

    def handle(self, command: DeleteBookingCommand) -> None:
        logger.info(f"Deleting booking {command.booking_id}")

        with DjangoUnitOfWork('delete_booking') as uow:
            booking = self.booking_repo.get_by_id(command.booking_id, lock=True)
            if booking.holds_items:
                self._release(booking.item_ids, booking.id)

            reversed_amount = Decimal('0')
            for entry in list(self.ledger.list_by_booking(booking.id)):
                self._reverse_entry(entry)
                reversed_amount += entry.balance_delta

            booking.mark_deleted(Money(abs(reversed_amount), booking.currency))
            uow.collect_events(booking)
            self.booking_repo.delete(booking.id)

        logger.info(f"Booking {booking.reference} deleted, reversed {reversed_amount}")


class AddPaymentHandler(BookingHandler):
    """Handler for recording a payment from a party"""

    def handle(self, command: AddPaymentCommand) -> LedgerEntry:
        amount = to_decimal(command.amount) if command.amount is not None else None
        if amount is None or amount <= 0:
            raise ValidationError("Payment amount must be positive", field='amount', amount=command.amount)
        logger.info(f"Recording payment of {amount} from party {command.party_id}")

        with DjangoUnitOfWork('add_payment') as uow:
            party = self.parties.get(command.party_id, lock=True, include_deleted=True)
            self.parties.ensure_can_transact(party, for_booking=False)

            entry = self.ledger.append(
                party_id=party.id,
                kind=LedgerEntry.Kind.PAYMENT,
                amount=amount,
                method=command.method,
                description=command.description or "Payment",
                entry_date=command.entry_date,
                created_by_id=command.created_by_id,
            )
            self.parties.adjust_balance(party.id, entry.balance_delta)

            uow.record(PaymentReceived(
                aggregate_id=party.id,
                entry_id=entry.id,
                party_id=party.id,
                amount=Money(amount, current_currency()),
                method=command.method,
            ))

        logger.info(f"Payment {entry.id} recorded for party {party.id}")
        return entry


class RemoveLedgerEntryHandler(BookingHandler):
    """
    Handler for deleting a standalone ledger entry

    Entries that belong to a booking change only through that booking.
    """

    def handle(self, command: RemoveLedgerEntryCommand) -> None:
        logger.info(f"Removing ledger entry {command.entry_id}")

        with DjangoUnitOfWork('remove_ledger_entry') as uow:
            entry = self.ledger.get(command.entry_id, lock=True)
            if entry.booking_id is not None:
                raise StateConflictError(
                    "Entries of a booking change through the booking",
                    entry_id=entry.id,
                    booking_id=entry.booking_id,
                )
            entry_id = entry.id
            self._reverse_entry(entry)

            uow.record(LedgerEntryRemoved(
                aggregate_id=entry.party_id,
                entry_id=entry_id,
                party_id=entry.party_id,
                kind=entry.kind,
                amount=Money(entry.amount, current_currency()),
            ))

        logger.info(f"Ledger entry {command.entry_id} removed")


# ===== Registration =====

COMMAND_HANDLERS = {
    CreateBookingCommand: CreateBookingHandler,
    EditBookingCommand: EditBookingHandler,
    ActivateBookingCommand: ActivateBookingHandler,
    ReturnBookingCommand: ReturnBookingHandler,
    CancelBookingCommand: CancelBookingHandler,
    DeleteBookingCommand: DeleteBookingHandler,
    AddPaymentCommand: AddPaymentHandler,
    RemoveLedgerEntryCommand: RemoveLedgerEntryHandler,
}


def register_command_handlers(bus, booking_repo=None):
    """Register one handler per command on the bus (safe to call twice)"""
    booking_repo = booking_repo or DjangoBookingRepository()
    for command_type, handler_class in COMMAND_HANDLERS.items():
        if bus.has_command_handler(command_type):
            continue
        bus.register_command_handler(command_type, handler_class(booking_repo).handle)
