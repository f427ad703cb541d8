"""
Booking Event Handlers

Subscribers run after the transaction that produced the event has
committed. They only log for now; failures never affect the committed
operation.
"""

import logging

from apps.bookings.domain.events import (
    BookingActivated,
    BookingCancelled,
    BookingCreated,
    BookingDeleted,
    BookingReturned,
    BookingRevised,
    LedgerEntryRemoved,
    PaymentReceived,
)

logger = logging.getLogger(__name__)


def log_booking_created(event: BookingCreated):
    logger.info(
        f"Booking {event.reference} created for party {event.party_id}: "
        f"{len(event.item_ids)} items, total {event.total_amount}, status {event.status}"
    )


def log_booking_revised(event: BookingRevised):
    logger.info(
        f"Booking {event.booking_id} revised: total {event.old_total} -> {event.new_total}, "
        f"released {len(event.released)}, reserved {len(event.reserved)}"
    )
    if event.old_party_id != event.party_id:
        logger.info(f"Booking {event.booking_id} moved from party {event.old_party_id} to {event.party_id}")


def log_booking_activated(event: BookingActivated):
    logger.info(f"Booking {event.booking_id} activated, invoiced {event.total_amount}")


def log_booking_returned(event: BookingReturned):
    logger.info(f"Booking {event.booking_id} returned, {len(event.item_ids)} items back in stock")


def log_booking_cancelled(event: BookingCancelled):
    refund = event.refund_amount if event.refund_amount is not None else "no refund"
    logger.info(f"Booking {event.booking_id} cancelled from {event.old_status} ({refund}): {event.reason}")


def log_booking_deleted(event: BookingDeleted):
    logger.warning(
        f"Booking {event.reference} deleted, reversed {event.reversed_amount} for party {event.party_id}"
    )


def log_payment_received(event: PaymentReceived):
    logger.info(f"Payment of {event.amount} ({event.method}) received from party {event.party_id}")


def log_ledger_entry_removed(event: LedgerEntryRemoved):
    logger.warning(f"Ledger {event.kind} {event.entry_id} of {event.amount} removed for party {event.party_id}")


EVENT_HANDLERS = {
    BookingCreated: [log_booking_created],
    BookingRevised: [log_booking_revised],
    BookingActivated: [log_booking_activated],
    BookingReturned: [log_booking_returned],
    BookingCancelled: [log_booking_cancelled],
    BookingDeleted: [log_booking_deleted],
    PaymentReceived: [log_payment_received],
    LedgerEntryRemoved: [log_ledger_entry_removed],
}


def register_event_handlers(bus):
    for event_type, handlers in EVENT_HANDLERS.items():
        for handler in handlers:
            bus.register_event_handler(event_type, handler)
