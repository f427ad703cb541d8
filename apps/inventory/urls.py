"""URL routing for inventory."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import InventoryItemViewSet

router = DefaultRouter()
router.register(r"items", InventoryItemViewSet, basename="inventory-item")

urlpatterns = [
    path("", include(router.urls)),
]
