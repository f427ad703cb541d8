"""Aggregates for the back-office dashboard."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from django.db import models  # type: ignore

from apps.bookings.models import Booking
from apps.configuration.services import current_currency
from apps.inventory.services import inventory_registry
from apps.ledger.models import LedgerEntry
from apps.parties.models import Party

ZERO = Decimal("0.00")


def overview(start: date | None = None, end: date | None = None) -> dict[str, Any]:
    """
    Revenue, money owed both ways, booking counts and inventory status.

    ``start``/``end`` narrow the booking and payment figures by date; balances
    and inventory are always current.
    """
    bookings = Booking.objects.all()
    payments = LedgerEntry.objects.filter(kind=LedgerEntry.Kind.PAYMENT)
    if start:
        bookings = bookings.filter(start_date__gte=start)
        payments = payments.filter(date__gte=start)
    if end:
        bookings = bookings.filter(start_date__lte=end)
        payments = payments.filter(date__lte=end)

    revenue = bookings.exclude(status=Booking.Status.CANCELLED).exclude(status=Booking.Status.PENDING).aggregate(
        total=models.Sum("total_amount")
    )["total"] or ZERO
    collected = payments.aggregate(total=models.Sum("amount"))["total"] or ZERO

    balances = Party.all_objects.aggregate(
        receivables=models.Sum("balance", filter=models.Q(balance__gt=0)),
        payables=models.Sum("balance", filter=models.Q(balance__lt=0)),
    )

    status_counts = {choice: 0 for choice in Booking.Status.values}
    for row in bookings.values("status").annotate(count=models.Count("id")):
        status_counts[row["status"]] = row["count"]

    return {
        "currency": current_currency(),
        "revenue": revenue,
        "collected": collected,
        "receivables": balances["receivables"] or ZERO,
        "payables": abs(balances["payables"] or ZERO),
        "bookings": {"total": sum(status_counts.values()), **status_counts},
        "inventory": inventory_registry.stats(),
        "parties": {
            "clients": Party.objects.filter(kind=Party.Kind.CLIENT).count(),
            "suppliers": Party.objects.filter(kind=Party.Kind.SUPPLIER).count(),
        },
    }
