"""
Serializers for the license management endpoints.

Request and response bodies use camelCase field names.
"""

from rest_framework import serializers

from licenses.domain.license import MAX_DURATION_DAYS
from licenses.domain.license_key import KEY_LENGTH


class GenerateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for generate license request."""

    clientName = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    clientEmail = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    licenseType = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=50)
    durationDays = serializers.IntegerField(
        required=False, allow_null=True, min_value=0, max_value=MAX_DURATION_DAYS
    )
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=5000)


class ResetLicenseRequestSerializer(serializers.Serializer):
    """
    Serializer for the body form of reset.

    Accepts ``licenseKey`` and, for older callers, ``key``.
    """

    licenseKey = serializers.CharField(required=False, allow_blank=True, max_length=KEY_LENGTH * 2)
    key = serializers.CharField(required=False, allow_blank=True, max_length=KEY_LENGTH * 2)

    def validate(self, attrs):
        """Require one of the two key fields."""
        license_key = (attrs.get("licenseKey") or attrs.get("key") or "").strip()
        if not license_key:
            raise serializers.ValidationError("License key not provided")
        return {"license_key": license_key}


class LicenseSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    key = serializers.CharField()
    clientName = serializers.CharField(source="client_name")
    clientEmail = serializers.CharField(source="client_email")
    licenseType = serializers.CharField(source="license_type")
    durationDays = serializers.IntegerField(source="duration_days")
    notes = serializers.CharField()
    status = serializers.CharField()
    createdAt = serializers.IntegerField(source="created_at")
    activatedAt = serializers.IntegerField(source="activated_at", allow_null=True)
    expiresAt = serializers.IntegerField(source="expires_at", allow_null=True)
    boundFingerprint = serializers.CharField(source="bound_fingerprint", allow_null=True)


class GeneratedLicenseSerializer(LicenseSerializer):
    """Serializer for a freshly generated license; also exposes ``licenseKey``."""

    licenseKey = serializers.CharField(source="key")


class ActivationRecordSerializer(serializers.Serializer):
    """Serializer for ActivationRecordDTO."""

    fingerprintHash = serializers.CharField(source="fingerprint_hash")
    activatedAt = serializers.IntegerField(source="activated_at")
    ipAddress = serializers.CharField(source="ip_address", allow_null=True)
    userAgent = serializers.CharField(source="user_agent")


class LicenseDetailSerializer(LicenseSerializer):
    """Serializer for LicenseDetailDTO."""

    activations = ActivationRecordSerializer(many=True)


class LicenseStatsSerializer(serializers.Serializer):
    """Serializer for LicenseStatsDTO."""

    unused = serializers.IntegerField()
    active = serializers.IntegerField()
    expired = serializers.IntegerField()
    revoked = serializers.IntegerField()
    total = serializers.IntegerField()
