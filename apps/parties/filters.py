"""FilterSet for party listing."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Party


class PartyFilterSet(django_filters.FilterSet):
    kind = django_filters.ChoiceFilter(choices=Party.Kind.choices)
    status = django_filters.ChoiceFilter(choices=Party.Status.choices)
    owes = django_filters.BooleanFilter(method="filter_owes")
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Party
        fields = ["kind", "status"]

    def filter_owes(self, queryset, name, value):  # type: ignore
        if value is None:
            return queryset
        if value:
            return queryset.filter(balance__gt=0)
        return queryset.filter(balance__lte=0)

    def filter_search(self, queryset, name, value):  # type: ignore
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value) | Q(phone__icontains=value) | Q(id_number__icontains=value)
        )
