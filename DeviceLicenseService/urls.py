"""
URL configuration for DeviceLicenseService project.
"""
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from core.views import HealthCacheView, HealthView, MetricsView, ReadyView

urlpatterns = [
    # Health check endpoints
    path("health", HealthView.as_view(), name="health"),
    path("health/cache", HealthCacheView.as_view(), name="health-cache"),
    path("ready", ReadyView.as_view(), name="ready"),
    path("metrics", MetricsView.as_view(), name="metrics"),
    # API endpoints
    path("api/", include("api.v1.licenses.urls")),
    path("api/", include("api.v1.activation.urls")),
    # OpenAPI Schema
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    # Swagger UI
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
]
