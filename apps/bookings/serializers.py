"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from shared.domain.value_objects import compute_days

from .models import Booking, BookingLine


class BookingLineSerializer(serializers.ModelSerializer):
    class Meta:
        model = BookingLine
        fields = ["item", "item_name", "daily_rate", "days", "line_total"]
        read_only_fields = fields


class BookingSerializer(serializers.ModelSerializer):
    party_name = serializers.CharField(source="party.name", read_only=True)
    lines = BookingLineSerializer(many=True, read_only=True)
    days = serializers.SerializerMethodField()
    created_by = serializers.CharField(source="created_by.username", read_only=True, default=None)

    class Meta:
        model = Booking
        fields = [
            "id",
            "reference",
            "party",
            "party_name",
            "start_date",
            "end_date",
            "days",
            "lines",
            "total_amount",
            "currency",
            "status",
            "notes",
            "created_by",
            "activated_at",
            "returned_at",
            "cancelled_at",
            "cancellation_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_days(self, obj: Booking) -> int:
        return compute_days(obj.start_date, obj.end_date)


class BookingWriteSerializer(serializers.Serializer):
    """Party, items and period for creating or editing a booking."""

    party = serializers.UUIDField()
    items = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    notes = serializers.CharField(required=False, allow_blank=True)
    hold = serializers.BooleanField(required=False, default=False)


class CancelBookingSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)


class QuoteRequestSerializer(serializers.Serializer):
    items = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
    start_date = serializers.DateField()
    end_date = serializers.DateField()


class QuoteLineSerializer(serializers.Serializer):
    item_id = serializers.UUIDField()
    item_name = serializers.CharField()
    daily_rate = serializers.DecimalField(max_digits=12, decimal_places=2, source="daily_rate.amount")
    days = serializers.IntegerField()
    line_total = serializers.DecimalField(max_digits=14, decimal_places=2, source="total.amount")


class QuoteSerializer(serializers.Serializer):
    lines = QuoteLineSerializer(many=True)
    days = serializers.IntegerField()
    total = serializers.DecimalField(max_digits=14, decimal_places=2, source="total.amount")
    currency = serializers.CharField()
