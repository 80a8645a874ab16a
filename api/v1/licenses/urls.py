"""
URL configuration for license management endpoints.
"""

from django.urls import path

from api.v1.licenses import views

app_name = "licenses_api"

urlpatterns = [
    path(
        "licenses/generate",
        views.GenerateLicenseView.as_view(),
        name="generate-license",
    ),
    path(
        "licenses/reset",
        views.ResetLicenseByBodyView.as_view(),
        name="reset-license-by-body",
    ),
    path(
        "licenses",
        views.LicenseListView.as_view(),
        name="list-licenses",
    ),
    path(
        "licenses/<str:key>",
        views.LicenseDetailView.as_view(),
        name="license-detail",
    ),
    path(
        "licenses/<str:key>/revoke",
        views.RevokeLicenseView.as_view(),
        name="revoke-license",
    ),
    path(
        "licenses/<str:key>/reset",
        views.ResetLicenseView.as_view(),
        name="reset-license",
    ),
    path(
        "stats",
        views.LicenseStatsView.as_view(),
        name="license-stats",
    ),
]
