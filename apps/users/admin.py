"""Admin registrations for operator accounts."""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import User


@admin.register(User)
class OperatorAdmin(BaseUserAdmin):
    fieldsets = BaseUserAdmin.fieldsets + (
        (_("Back office"), {"fields": ("role", "phone", "deleted_at")}),
    )
    list_display = ("username", "email", "role", "is_active", "deleted_at", "created_at")
    list_filter = ("role", "is_active")
    readonly_fields = ("created_at", "updated_at")
