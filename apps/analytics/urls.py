"""URL routing for analytics endpoints."""

from django.urls import path  # type: ignore

from .views import OverviewAnalyticsView


urlpatterns = [
    path('overview/', OverviewAnalyticsView.as_view(), name='analytics-overview'),
]
