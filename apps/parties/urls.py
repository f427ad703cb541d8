"""URL routing for parties."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import PartyViewSet

router = DefaultRouter()
router.register(r"", PartyViewSet, basename="party")

urlpatterns = [
    path("", include(router.urls)),
]
