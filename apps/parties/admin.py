"""Admin registrations for parties."""

from __future__ import annotations

from django.contrib import admin

from .models import Party


@admin.register(Party)
class PartyAdmin(admin.ModelAdmin):
    list_display = ("name", "kind", "status", "phone", "balance", "credit_limit", "deleted_at")
    list_filter = ("kind", "status")
    search_fields = ("name", "phone", "id_number", "email")
    readonly_fields = ("balance", "created_at", "updated_at")

    def get_queryset(self, request):  # type: ignore
        return Party.all_objects.all()
