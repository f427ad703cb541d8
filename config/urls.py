"""URL configuration for the rental back office.

Routes the Django admin, the versioned REST API of each app and the
OpenAPI schema.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView  # type: ignore

urlpatterns = [
    path('admin/', admin.site.urls),
    # Application URLs
    path('api/v1/auth/', include(('apps.users.auth_urls', 'auth'), namespace='auth')),
    path('api/v1/users/', include('apps.users.urls')),
    path('api/v1/settings/', include('apps.configuration.urls')),
    path('api/v1/inventory/', include('apps.inventory.urls')),
    path('api/v1/parties/', include('apps.parties.urls')),
    path('api/v1/ledger/', include('apps.ledger.urls')),
    path('api/v1/bookings/', include('apps.bookings.urls')),
    path('api/v1/analytics/', include('apps.analytics.urls')),
    # API schema
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
]
