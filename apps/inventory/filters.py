"""FilterSet for inventory listing."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import InventoryItem


class InventoryItemFilterSet(django_filters.FilterSet):
    category = django_filters.CharFilter(field_name="category", lookup_expr="exact")
    status = django_filters.ChoiceFilter(choices=InventoryItem.Status.choices)
    ownership = django_filters.ChoiceFilter(choices=InventoryItem.Ownership.choices)
    supplier = django_filters.UUIDFilter(field_name="supplier_id")
    rate_min = django_filters.NumberFilter(field_name="daily_rate", lookup_expr="gte")
    rate_max = django_filters.NumberFilter(field_name="daily_rate", lookup_expr="lte")
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = InventoryItem
        fields = ["category", "status", "ownership", "supplier"]

    def filter_search(self, queryset, name, value):  # type: ignore
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(identifier__icontains=value))
