"""Serializers for parties and their statements."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.ledger.serializers import LedgerEntrySerializer

from .models import Party


class PartySerializer(serializers.ModelSerializer):
    credit_limit = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True
    )

    class Meta:
        model = Party
        fields = [
            "id",
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
            "balance",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "balance", "created_at", "updated_at"]


class StatementQuerySerializer(serializers.Serializer):
    start = serializers.DateField(required=False)
    end = serializers.DateField(required=False)


class StatementLineSerializer(serializers.Serializer):
    entry = LedgerEntrySerializer()
    debit = serializers.DecimalField(max_digits=14, decimal_places=2)
    credit = serializers.DecimalField(max_digits=14, decimal_places=2)
    running_balance = serializers.DecimalField(max_digits=14, decimal_places=2)


class StatementSerializer(serializers.Serializer):
    party_id = serializers.UUIDField()
    start = serializers.DateField(allow_null=True)
    end = serializers.DateField(allow_null=True)
    opening_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    closing_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_debit = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_credit = serializers.DecimalField(max_digits=14, decimal_places=2)
    lines = StatementLineSerializer(many=True)
