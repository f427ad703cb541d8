"""FilterSet for booking listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Booking.Status.choices)
    party = django_filters.UUIDFilter(field_name="party_id")
    item = django_filters.UUIDFilter(field_name="lines__item_id", distinct=True)
    start_from = django_filters.DateFilter(field_name="start_date", lookup_expr="gte")
    start_to = django_filters.DateFilter(field_name="start_date", lookup_expr="lte")
    reference = django_filters.CharFilter(field_name="reference", lookup_expr="icontains")

    class Meta:
        model = Booking
        fields = ["status", "party"]
