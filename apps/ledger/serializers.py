"""Serializers for ledger entries."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import LedgerEntry


class LedgerEntrySerializer(serializers.ModelSerializer):
    party_name = serializers.CharField(source="party.name", read_only=True)
    signed_amount = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    balance_delta = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    created_by = serializers.CharField(source="created_by.username", read_only=True, default=None)

    class Meta:
        model = LedgerEntry
        fields = [
            "id",
            "party",
            "party_name",
            "booking",
            "date",
            "kind",
            "direction",
            "amount",
            "signed_amount",
            "balance_delta",
            "method",
            "description",
            "created_by",
            "created_at",
        ]
        read_only_fields = fields


class PaymentSerializer(serializers.Serializer):
    party = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    method = serializers.ChoiceField(choices=LedgerEntry.Method.choices, default=LedgerEntry.Method.CASH)
    date = serializers.DateField(required=False)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
