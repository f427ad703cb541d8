"""Transaction Log: append-style record of invoices, payments and refunds.

Appending or deleting an entry never touches the party balance. Callers
pair every :meth:`TransactionLog.append` and :meth:`TransactionLog.delete`
with exactly one ``party_ledger.adjust_balance`` carrying the entry's
``balance_delta`` (or its inverse).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from uuid import UUID

from django.db.models import Q, QuerySet, Sum  # type: ignore

from shared.domain.exceptions import NotFoundError, ValidationError
from shared.domain.value_objects import to_decimal
from shared.infrastructure.db import lock_for_update

from .models import LedgerEntry

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class StatementLine:
    entry: LedgerEntry
    debit: Decimal
    credit: Decimal
    running_balance: Decimal


@dataclass
class Statement:
    """Entries in date order with the balance after each one."""

    party_id: UUID
    start: date | None
    end: date | None
    opening_balance: Decimal = ZERO
    lines: list[StatementLine] = field(default_factory=list)

    @property
    def closing_balance(self) -> Decimal:
        if self.lines:
            return self.lines[-1].running_balance
        return self.opening_balance

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines), ZERO)

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines), ZERO)


class TransactionLog:
    def append(
        self,
        *,
        party_id: UUID,
        kind: str,
        amount,
        booking_id: UUID | None = None,
        description: str = "",
        method: str = "",
        entry_date: date | None = None,
        created_by_id: int | None = None,
    ) -> LedgerEntry:
        amount = to_decimal(amount)
        if amount < 0:
            raise ValidationError("Ledger amounts are recorded without sign", amount=amount)
        if kind not in LedgerEntry.Kind.values:
            raise ValidationError("Unknown ledger entry kind", kind=kind)
        if method and method not in LedgerEntry.Method.values:
            raise ValidationError("Unknown payment method", method=method)

        entry = LedgerEntry(
            party_id=party_id,
            booking_id=booking_id,
            kind=kind,
            direction=LedgerEntry.direction_for(kind),
            amount=amount,
            method=method,
            description=description,
            created_by_id=created_by_id,
        )
        if entry_date is not None:
            entry.date = entry_date
        entry.save()
        logger.info(f"Ledger {kind} {amount} appended for party {party_id} (entry {entry.id})")
        return entry

    def get(self, entry_id: UUID, *, lock: bool = False) -> LedgerEntry:
        queryset = LedgerEntry.objects.filter(pk=entry_id)
        if lock:
            queryset = lock_for_update(queryset)
        entry = queryset.first()
        if entry is None:
            raise NotFoundError("ledger_entry", entry_id)
        return entry

    def list_by_party(self, party_id: UUID, start: date | None = None, end: date | None = None) -> QuerySet:
        queryset = LedgerEntry.objects.filter(party_id=party_id)
        if start:
            queryset = queryset.filter(date__gte=start)
        if end:
            queryset = queryset.filter(date__lte=end)
        return queryset.order_by("date", "created_at")

    def list_by_booking(self, booking_id: UUID) -> QuerySet:
        return LedgerEntry.objects.filter(booking_id=booking_id).order_by("date", "created_at")

    def invoice_for(self, booking_id: UUID, *, lock: bool = False) -> LedgerEntry | None:
        queryset = LedgerEntry.objects.filter(booking_id=booking_id, kind=LedgerEntry.Kind.INVOICE)
        if lock:
            queryset = lock_for_update(queryset)
        return queryset.order_by("created_at").first()

    def rewrite_invoice(self, entry: LedgerEntry, *, amount, party_id: UUID, description: str | None = None) -> LedgerEntry:
        """Overwrite a booking invoice in place after the booking was edited."""
        if entry.kind != LedgerEntry.Kind.INVOICE:
            raise ValidationError("Only invoices can be rewritten", entry_id=entry.id, kind=entry.kind)
        entry.amount = to_decimal(amount)
        entry.party_id = party_id
        update_fields = ["amount", "party"]
        if description is not None:
            entry.description = description
            update_fields.append("description")
        entry.save(update_fields=update_fields)
        return entry

    def delete(self, entry_id: UUID) -> LedgerEntry:
        """Remove the entry and return it so the caller can reverse its balance effect."""
        entry = self.get(entry_id, lock=True)
        entry.delete()
        logger.info(f"Ledger entry {entry_id} ({entry.kind} {entry.amount}) removed")
        return entry

    def balance_of(self, party_id: UUID, before: date | None = None) -> Decimal:
        """Sum of balance deltas for a party, optionally for entries dated before ``before``."""
        queryset = LedgerEntry.objects.filter(party_id=party_id)
        if before:
            queryset = queryset.filter(date__lt=before)
        totals = queryset.aggregate(
            debit=Sum("amount", filter=Q(direction=LedgerEntry.Direction.DEBIT)),
            credit=Sum("amount", filter=Q(direction=LedgerEntry.Direction.CREDIT)),
        )
        return to_decimal((totals["debit"] or ZERO) - (totals["credit"] or ZERO))

    def statement(self, party_id: UUID, start: date | None = None, end: date | None = None) -> Statement:
        if start and end and start > end:
            raise ValidationError("Statement start must not be after its end", start=start, end=end)
        opening = self.balance_of(party_id, before=start) if start else ZERO
        statement = Statement(party_id=party_id, start=start, end=end, opening_balance=opening)
        running = opening
        for entry in self.list_by_party(party_id, start, end):
            running += entry.balance_delta
            is_debit = entry.direction == LedgerEntry.Direction.DEBIT
            statement.lines.append(
                StatementLine(
                    entry=entry,
                    debit=entry.amount if is_debit else ZERO,
                    credit=ZERO if is_debit else entry.amount,
                    running_balance=running,
                )
            )
        return statement


transaction_log = TransactionLog()
