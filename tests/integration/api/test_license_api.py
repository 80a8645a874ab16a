"""
Integration tests for the license management API endpoints.
"""

from unittest import mock

import pytest
from asgiref.sync import async_to_sync
from django.urls import reverse

from activations.infrastructure.models import Activation as ActivationModel
from core.domain.exceptions import StoreUnavailableError
from licenses.domain.license import MAX_DURATION_DAYS
from licenses.domain.license_key import is_well_formed
from licenses.infrastructure.models import License as LicenseModel


def validate(api_client, key, fingerprint):
    return api_client.post(
        reverse("activation:validate-license"),
        {"key": key, "fingerprint": fingerprint},
        format="json",
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestGenerateLicenseAPI:
    """Integration tests for license generation."""

    def test_generate_license(self, api_client):
        """Test generating a license with explicit metadata."""
        response = api_client.post(
            reverse("licenses_api:generate-license"),
            {
                "clientName": "Maria Silva",
                "clientEmail": "maria@example.com",
                "licenseType": "annual",
                "durationDays": 365,
                "notes": "Paid by invoice",
            },
            format="json",
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert is_well_formed(data["key"])
        assert data["licenseKey"] == data["key"]
        assert data["clientName"] == "Maria Silva"
        assert data["clientEmail"] == "maria@example.com"
        assert data["durationDays"] == 365
        assert data["status"] == "unused"
        assert data["activatedAt"] is None
        assert isinstance(data["createdAt"], int)
        assert LicenseModel.objects.filter(key=data["key"]).exists()

    def test_generate_with_defaults(self, api_client):
        """Test an empty body uses the defaults."""
        response = api_client.post(reverse("licenses_api:generate-license"), {}, format="json")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["clientName"] == "Não especificado"
        assert data["clientEmail"] == "Não especificado"
        assert data["licenseType"] == "lifetime"
        assert data["durationDays"] == 0
        assert data["notes"] == ""

    def test_generate_rejects_negative_duration(self, api_client):
        """Test malformed input is a business rejection with HTTP 200."""
        response = api_client.post(
            reverse("licenses_api:generate-license"), {"durationDays": -5}, format="json"
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "INVALID_REQUEST"
        assert "durationDays" in body["errors"]
        assert LicenseModel.objects.count() == 0

    @pytest.mark.parametrize("duration", [MAX_DURATION_DAYS + 1, 10**19])
    def test_generate_rejects_oversized_duration(self, api_client, duration):
        """Test durations the store cannot hold are field errors, not 500s."""
        response = api_client.post(
            reverse("licenses_api:generate-license"), {"durationDays": duration}, format="json"
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "INVALID_REQUEST"
        assert "durationDays" in body["errors"]
        assert LicenseModel.objects.count() == 0

    def test_generate_accepts_largest_duration(self, api_client):
        response = api_client.post(
            reverse("licenses_api:generate-license"), {"durationDays": MAX_DURATION_DAYS}, format="json"
        )

        assert response.json()["success"] is True
        assert LicenseModel.objects.get().duration_days == MAX_DURATION_DAYS

    def test_generate_unparseable_json(self, api_client):
        response = api_client.post(
            reverse("licenses_api:generate-license"), "{not json", content_type="application/json"
        )

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_store_failure_is_generic_500(self, api_client):
        """Test internal errors never leak details."""
        with mock.patch(
            "licenses.infrastructure.repositories.django_license_repository.DjangoLicenseRepository.create",
            side_effect=StoreUnavailableError("connection refused on 10.0.0.5"),
        ):
            response = api_client.post(reverse("licenses_api:generate-license"), {}, format="json")

        assert response.status_code == 500
        body = response.json()
        assert body == {
            "success": False,
            "code": "INTERNAL_ERROR",
            "message": "An internal error occurred",
        }


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseQueryAPI:
    """Integration tests for list, get and stats."""

    def test_list_licenses(self, api_client, db_license, db_lifetime_license):
        response = api_client.get(reverse("licenses_api:list-licenses"))

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert {item["key"] for item in body["data"]} == {db_license.key, db_lifetime_license.key}

    def test_get_license_with_activations(self, api_client, db_license):
        validate(api_client, db_license.key, "dev-A")

        response = api_client.get(reverse("licenses_api:license-detail", args=[db_license.key]))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["key"] == db_license.key
        assert data["status"] == "active"
        assert len(data["activations"]) == 1
        activation = data["activations"][0]
        assert activation["ipAddress"] == "127.0.0.1"
        assert "dev-A" not in str(data)

    def test_get_missing_license(self, api_client):
        response = api_client.get(reverse("licenses_api:license-detail", args=["AAAA-BBBB-CCCC-DDDD"]))

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "LICENSE_NOT_FOUND"

    def test_stats(self, api_client, db_license, db_lifetime_license):
        validate(api_client, db_license.key, "dev-A")

        response = api_client.get(reverse("licenses_api:license-stats"))

        assert response.status_code == 200
        assert response.json()["data"] == {
            "unused": 1,
            "active": 1,
            "expired": 0,
            "revoked": 0,
            "total": 2,
        }

    def test_stats_refresh_after_change(self, api_client, db_license):
        """Test license events drop the cached stats."""
        first = api_client.get(reverse("licenses_api:license-stats")).json()["data"]
        api_client.post(reverse("licenses_api:revoke-license", args=[db_license.key]))
        second = api_client.get(reverse("licenses_api:license-stats")).json()["data"]

        assert first["unused"] == 1
        assert second["unused"] == 0
        assert second["revoked"] == 1


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseLifecycleAPI:
    """Integration tests for revoke, reset and delete."""

    def test_revoke(self, api_client, db_license):
        response = api_client.post(reverse("licenses_api:revoke-license", args=[db_license.key]))

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "License revoked successfully"}
        assert LicenseModel.objects.get(key=db_license.key).status == "revoked"

    def test_revoke_missing(self, api_client):
        response = api_client.post(reverse("licenses_api:revoke-license", args=["AAAA-BBBB-CCCC-DDDD"]))

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_reset_by_path(self, api_client, db_license):
        validate(api_client, db_license.key, "dev-A")

        response = api_client.post(reverse("licenses_api:reset-license", args=[db_license.key]))

        assert response.status_code == 200
        assert response.json()["success"] is True
        model = LicenseModel.objects.get(key=db_license.key)
        assert model.status == "unused"
        assert model.bound_fingerprint is None
        assert model.activated_at is None
        assert model.expires_at is None

    @pytest.mark.parametrize("field", ["licenseKey", "key"])
    def test_reset_by_body(self, api_client, db_license, field):
        validate(api_client, db_license.key, "dev-A")

        response = api_client.post(
            reverse("licenses_api:reset-license-by-body"), {field: db_license.key}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert LicenseModel.objects.get(key=db_license.key).status == "unused"

    def test_reset_by_body_without_key(self, api_client):
        response = api_client.post(reverse("licenses_api:reset-license-by-body"), {}, format="json")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "INVALID_REQUEST"

    def test_reset_missing(self, api_client):
        response = api_client.post(
            reverse("licenses_api:reset-license-by-body"),
            {"licenseKey": "AAAA-BBBB-CCCC-DDDD"},
            format="json",
        )

        assert response.status_code == 404
        assert response.json()["code"] == "LICENSE_NOT_FOUND"

    def test_delete_cascades(self, api_client, db_license):
        validate(api_client, db_license.key, "dev-A")

        response = api_client.delete(reverse("licenses_api:license-detail", args=[db_license.key]))

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert not LicenseModel.objects.filter(key=db_license.key).exists()
        assert ActivationModel.objects.count() == 0

        missing = api_client.get(reverse("licenses_api:license-detail", args=[db_license.key]))
        assert missing.status_code == 404

    def test_delete_missing(self, api_client):
        response = api_client.delete(reverse("licenses_api:license-detail", args=["AAAA-BBBB-CCCC-DDDD"]))

        assert response.status_code == 404
