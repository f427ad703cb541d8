"""Admin registrations for the ledger (read-only)."""

from __future__ import annotations

from django.contrib import admin

from .models import LedgerEntry


@admin.register(LedgerEntry)
class LedgerEntryAdmin(admin.ModelAdmin):
    list_display = ("date", "party", "kind", "direction", "amount", "method", "booking")
    list_filter = ("kind", "direction", "method")
    search_fields = ("party__name", "description")
    date_hierarchy = "date"

    def has_add_permission(self, request):  # type: ignore
        return False

    def has_change_permission(self, request, obj=None):  # type: ignore
        return False

    def has_delete_permission(self, request, obj=None):  # type: ignore
        return False
