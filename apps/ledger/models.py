"""Ledger entries (invoices, payments, refunds)."""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class LedgerEntry(models.Model):
    """A single financial movement for a party.

    ``amount`` is never negative. Whether the movement raises or lowers
    what the party owes is carried by ``direction``, which follows from
    ``kind``.
    """

    class Kind(models.TextChoices):
        INVOICE = "invoice", _("Invoice")
        PAYMENT = "payment", _("Payment")
        REFUND = "refund", _("Refund")

    class Direction(models.TextChoices):
        DEBIT = "debit", _("Debit")
        CREDIT = "credit", _("Credit")

    class Method(models.TextChoices):
        CASH = "cash", _("Cash")
        TRANSFER = "transfer", _("Bank transfer")
        CREDIT = "credit", _("On credit")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    party = models.ForeignKey(
        "parties.Party",
        on_delete=models.PROTECT,
        related_name="ledger_entries",
    )
    booking = models.ForeignKey(
        "bookings.Booking",
        on_delete=models.PROTECT,
        related_name="ledger_entries",
        null=True,
        blank=True,
    )
    date = models.DateField(default=timezone.localdate, db_index=True)
    kind = models.CharField(max_length=20, choices=Kind.choices)
    direction = models.CharField(max_length=10, choices=Direction.choices)
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    method = models.CharField(max_length=20, choices=Method.choices, blank=True)
    description = models.CharField(max_length=255, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="ledger_entries",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Ledger entry")
        verbose_name_plural = _("Ledger entries")
        ordering = ["date", "created_at"]
        indexes = [
            models.Index(fields=["party", "date"], name="ledger_entry_party_date_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(amount__gte=0), name="ledger_entry_amount_non_negative"),
        ]

    def __str__(self) -> str:
        return f"{self.get_kind_display()} {self.amount} ({self.date})"

    @classmethod
    def direction_for(cls, kind: str) -> str:
        """Invoices raise what the party owes, payments and refunds lower it."""
        if kind == cls.Kind.INVOICE:
            return cls.Direction.DEBIT
        return cls.Direction.CREDIT

    @property
    def balance_delta(self) -> Decimal:
        """Effect of this entry on the party balance."""
        if self.direction == self.Direction.DEBIT:
            return self.amount
        return -self.amount

    @property
    def signed_amount(self) -> Decimal:
        """Presentation sign: invoices negative, payments and refunds positive."""
        return -self.balance_delta
