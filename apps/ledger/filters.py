"""FilterSet for ledger entries."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import LedgerEntry


class LedgerEntryFilterSet(django_filters.FilterSet):
    party = django_filters.UUIDFilter(field_name="party_id")
    booking = django_filters.UUIDFilter(field_name="booking_id")
    kind = django_filters.ChoiceFilter(choices=LedgerEntry.Kind.choices)
    method = django_filters.ChoiceFilter(choices=LedgerEntry.Method.choices)
    date_from = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="date", lookup_expr="lte")

    class Meta:
        model = LedgerEntry
        fields = ["party", "booking", "kind", "method"]
