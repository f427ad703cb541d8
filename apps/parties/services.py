"""Party Ledger: customers/suppliers and their running balance.

The stored ``balance`` is a derived cache of the party's ledger entries.
It only changes through :meth:`PartyLedger.adjust_balance`, which every
writer of the transaction log pairs with its append or delete.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any
from uuid import UUID

from django.db import transaction  # type: ignore
from django.db.models import F, Q, QuerySet  # type: ignore
from django.utils import timezone  # type: ignore

from apps.ledger.services import transaction_log
from shared.domain.exceptions import (
    CreditLimitExceededError,
    NotFoundError,
    StateConflictError,
    ValidationError,
)
from shared.domain.value_objects import to_decimal
from shared.infrastructure.db import lock_for_update

from .models import Party

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {
    "kind",
    "name",
    "id_number",
    "phone",
    "email",
    "address",
    "contact_person",
    "notes",
    "status",
    "credit_limit",
}


@dataclass(frozen=True)
class BalanceMismatch:
    party_id: UUID
    stored: Decimal
    expected: Decimal


class PartyLedger:
    """CRUD for parties plus the balance arithmetic."""

    def get(self, party_id: UUID, *, lock: bool = False, include_deleted: bool = False) -> Party:
        manager = Party.all_objects if include_deleted else Party.objects
        queryset = manager.filter(pk=party_id)
        if lock:
            queryset = lock_for_update(queryset)
        party = queryset.first()
        if party is None:
            raise NotFoundError("party", party_id)
        return party

    def list(self, kind: str | None = None, status: str | None = None, search: str | None = None) -> QuerySet:
        queryset = Party.objects.all()
        if kind:
            queryset = queryset.filter(kind=kind)
        if status:
            queryset = queryset.filter(status=status)
        if search:
            queryset = queryset.filter(
                Q(name__icontains=search) | Q(phone__icontains=search) | Q(id_number__icontains=search)
            )
        return queryset

    def create(self, **fields: Any) -> Party:
        if "balance" in fields:
            raise ValidationError("Balance is derived from ledger entries", field="balance")
        self._check_fields(fields)
        if not fields.get("name"):
            raise ValidationError("Party name is required", field="name")
        party = Party.objects.create(**fields)
        logger.info(f"Party {party.id} created ({party.kind})")
        return party

    def update(self, party_id: UUID, **patch: Any) -> Party:
        if "balance" in patch:
            raise ValidationError("Balance is derived from ledger entries", field="balance")
        self._check_fields(patch)
        party = self.get(party_id)
        kind = patch.get("kind")
        if (
            kind is not None
            and kind != party.kind
            and party.kind == Party.Kind.SUPPLIER
            and party.supplied_items.exists()
        ):
            raise StateConflictError(
                "Supplier still has inventory items",
                party_id=party.id,
                items=party.supplied_items.count(),
            )
        for field, value in patch.items():
            setattr(party, field, value)
        party.save()
        return party

    def soft_delete(self, party_id: UUID) -> Party:
        """Mark the party deleted; bookings and entries keep referencing it."""
        party = self.get(party_id)
        party.soft_delete()
        logger.info(f"Party {party_id} soft-deleted")
        return party

    def adjust_balance(self, party_id: UUID, delta) -> Decimal:
        """balance += delta, done in the database. Returns the new balance."""
        delta = to_decimal(delta)
        updated = Party.all_objects.filter(pk=party_id).update(
            balance=F("balance") + delta,
            updated_at=timezone.now(),
        )
        if not updated:
            raise NotFoundError("party", party_id)
        balance = Party.all_objects.values_list("balance", flat=True).get(pk=party_id)
        logger.debug(f"Party {party_id} balance adjusted by {delta} to {balance}")
        return balance

    def recompute_balance(self, party_id: UUID) -> Decimal:
        return transaction_log.balance_of(party_id)

    def reconcile(self, *, fix: bool = True) -> list[BalanceMismatch]:
        """Compare every stored balance with the sum of its ledger entries.

        Each party is checked inside its own transaction with the party row
        locked, the same lock booking and payment writers take.
        """
        mismatches = []
        for party_id in Party.all_objects.values_list("id", flat=True):
            with transaction.atomic():
                locked = lock_for_update(Party.all_objects.filter(pk=party_id))
                stored = locked.values_list("balance", flat=True).first()
                if stored is None:
                    continue
                expected = self.recompute_balance(party_id)
                if stored == expected:
                    continue
                mismatches.append(BalanceMismatch(party_id=party_id, stored=stored, expected=expected))
                logger.warning(f"Party {party_id} balance {stored} does not match ledger total {expected}")
                if fix:
                    Party.all_objects.filter(pk=party_id).update(balance=expected, updated_at=timezone.now())
        return mismatches

    def ensure_can_transact(self, party: Party, *, for_booking: bool = True) -> None:
        if party.is_deleted:
            raise StateConflictError("Party has been deleted", party_id=party.id)
        if for_booking and party.is_blacklisted:
            raise StateConflictError("Party is blacklisted", party_id=party.id, status=party.status)

    def ensure_within_credit_limit(self, party: Party, delta) -> None:
        delta = to_decimal(delta)
        if delta <= 0 or party.credit_limit is None:
            return
        projected = party.balance + delta
        if projected > party.credit_limit:
            raise CreditLimitExceededError(
                party_id=party.id,
                balance=party.balance,
                delta=delta,
                credit_limit=party.credit_limit,
            )

    @staticmethod
    def _check_fields(fields: dict[str, Any]) -> None:
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError("Unknown party fields", fields=sorted(unknown))
        credit_limit = fields.get("credit_limit")
        if credit_limit is not None and to_decimal(credit_limit) < 0:
            raise ValidationError("Credit limit cannot be negative", field="credit_limit")


party_ledger = PartyLedger()
