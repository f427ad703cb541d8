"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass, field
from typing import List
from uuid import UUID

from shared.domain.base import DomainEvent
from shared.domain.value_objects import Money


# ===== Booking Events =====

@dataclass(kw_only=True)
class BookingCreated(DomainEvent):
    """
    Event: A new booking was created

    ``status`` is 'active' when items were reserved and invoiced right
    away, 'pending' for a hold.
    """
    booking_id: UUID
    reference: str
    party_id: UUID
    item_ids: List[UUID] = field(default_factory=list)
    total_amount: Money
    status: str


@dataclass(kw_only=True)
class BookingRevised(DomainEvent):
    """Event: Booking lines, dates or party were replaced"""
    booking_id: UUID
    old_party_id: UUID
    party_id: UUID
    released: List[UUID] = field(default_factory=list)
    reserved: List[UUID] = field(default_factory=list)
    old_total: Money
    new_total: Money


@dataclass(kw_only=True)
class BookingActivated(DomainEvent):
    """Event: A held booking was activated (PENDING -> ACTIVE)"""
    booking_id: UUID
    party_id: UUID
    total_amount: Money


@dataclass(kw_only=True)
class BookingReturned(DomainEvent):
    """Event: Items came back (ACTIVE -> COMPLETED)"""
    booking_id: UUID
    item_ids: List[UUID] = field(default_factory=list)


@dataclass(kw_only=True)
class BookingCancelled(DomainEvent):
    """
    Event: Booking was cancelled

    ``refund_amount`` is set when an invoice was refunded.
    """
    booking_id: UUID
    reason: str
    refund_amount: Money | None
    old_status: str  # Status before cancellation


@dataclass(kw_only=True)
class BookingDeleted(DomainEvent):
    """Event: Booking removed and its ledger entries reversed"""
    booking_id: UUID
    reference: str
    party_id: UUID
    item_ids: List[UUID] = field(default_factory=list)
    reversed_amount: Money


# ===== Ledger Events =====

@dataclass(kw_only=True)
class PaymentReceived(DomainEvent):
    """Event: A party paid the business"""
    entry_id: UUID
    party_id: UUID
    amount: Money
    method: str


@dataclass(kw_only=True)
class LedgerEntryRemoved(DomainEvent):
    """Event: A standalone ledger entry was deleted and its balance effect reversed"""
    entry_id: UUID
    party_id: UUID
    kind: str
    amount: Money
