"""Serializers for inventory items."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.parties.models import Party

from .models import InventoryItem


class InventoryItemSerializer(serializers.ModelSerializer):
    supplier = serializers.PrimaryKeyRelatedField(
        queryset=Party.objects.filter(kind=Party.Kind.SUPPLIER),
        required=False,
        allow_null=True,
    )
    supplier_name = serializers.CharField(source="supplier.name", read_only=True, default=None)
    daily_rate = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)

    class Meta:
        model = InventoryItem
        fields = [
            "id",
            "name",
            "identifier",
            "category",
            "brand",
            "model_name",
            "condition",
            "ownership",
            "status",
            "daily_rate",
            "weekly_rate",
            "monthly_rate",
            "image_url",
            "supplier",
            "supplier_name",
            "supplier_cost",
            "supplier_agreement",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class InventoryStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    available = serializers.IntegerField()
    rented = serializers.IntegerField()
    maintenance = serializers.IntegerField()
    retired = serializers.IntegerField()
