from __future__ import annotations

from django.contrib import admin

from .models import SystemSettings


@admin.register(SystemSettings)
class SystemSettingsAdmin(admin.ModelAdmin):
    list_display = ("app_name", "item_name", "currency", "updated_at")
