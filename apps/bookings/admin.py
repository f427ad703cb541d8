"""Admin registration for bookings (read-only: writes go through the engine)."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking, BookingLine


class BookingLineInline(admin.TabularInline):
    model = BookingLine
    extra = 0
    fields = ("item", "item_name", "daily_rate", "days", "line_total")
    readonly_fields = fields
    can_delete = False


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "reference",
        "party",
        "status",
        "start_date",
        "end_date",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "start_date")
    search_fields = ("reference", "party__name")
    inlines = (BookingLineInline,)

    def has_add_permission(self, request):  # type: ignore
        return False

    def has_change_permission(self, request, obj=None):  # type: ignore
        return False

    def has_delete_permission(self, request, obj=None):  # type: ignore
        return False
