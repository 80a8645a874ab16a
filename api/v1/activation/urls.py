"""
URL configuration for the validation endpoint.
"""

from django.urls import path

from api.v1.activation import views

app_name = "activation"

urlpatterns = [
    path(
        "validate",
        views.ValidateLicenseView.as_view(),
        name="validate-license",
    ),
]
