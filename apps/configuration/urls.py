"""URL routing for system settings."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import ApplyPresetView, SystemSettingsView

urlpatterns = [
    path("", SystemSettingsView.as_view(), name="system-settings"),
    path("preset/", ApplyPresetView.as_view(), name="system-settings-preset"),
]
