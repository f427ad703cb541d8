"""Admin registrations for inventory."""

from __future__ import annotations

from django.contrib import admin

from .models import InventoryItem


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ("name", "identifier", "category", "status", "daily_rate", "ownership", "deleted_at")
    list_filter = ("status", "category", "ownership", "condition")
    search_fields = ("name", "identifier", "brand")
    readonly_fields = ("status", "created_at", "updated_at")

    def get_queryset(self, request):  # type: ignore
        return InventoryItem.all_objects.all()
