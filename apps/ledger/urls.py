"""URL routing for the ledger."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import LedgerEntryViewSet

router = DefaultRouter()
router.register(r"entries", LedgerEntryViewSet, basename="ledger-entry")

urlpatterns = [
    path("", include(router.urls)),
]
