"""Inventory API views."""

from __future__ import annotations

from rest_framework import viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import AdminCanDelete

from .filters import InventoryItemFilterSet
from .serializers import InventoryItemSerializer, InventoryStatsSerializer
from .services import inventory_registry


class InventoryItemViewSet(viewsets.ModelViewSet):
    """Rentable items. Deleting (soft) requires an administrator."""

    serializer_class = InventoryItemSerializer
    permission_classes = [AdminCanDelete]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = InventoryItemFilterSet
    ordering_fields = ["name", "daily_rate", "created_at", "status"]

    def get_queryset(self):  # type: ignore
        return inventory_registry.list()

    def perform_create(self, serializer):  # type: ignore
        serializer.instance = inventory_registry.create(**serializer.validated_data)

    def perform_update(self, serializer):  # type: ignore
        serializer.instance = inventory_registry.update(serializer.instance.pk, **serializer.validated_data)

    def perform_destroy(self, instance):  # type: ignore
        inventory_registry.delete(instance.pk)

    @action(detail=False, methods=["get"])
    def stats(self, request):  # type: ignore
        return Response(InventoryStatsSerializer(inventory_registry.stats()).data)
