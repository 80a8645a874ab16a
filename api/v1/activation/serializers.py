"""
Serializers for the validation endpoint.
"""

from rest_framework import serializers


class ValidateLicenseRequestSerializer(serializers.Serializer):
    """
    Serializer for validate license request.

    Missing or blank fields are left to the engine, which rejects them
    with ``INVALID_REQUEST``.
    """

    key = serializers.CharField(required=False, allow_blank=True, default="", max_length=64, trim_whitespace=True)
    # Fingerprints are hashed exactly as sent.
    fingerprint = serializers.CharField(
        required=False, allow_blank=True, default="", max_length=1024, trim_whitespace=False
    )


class LicenseHolderSerializer(serializers.Serializer):
    """Serializer for LicenseHolderDTO."""

    name = serializers.CharField()
    email = serializers.CharField()


class ValidationDataSerializer(serializers.Serializer):
    """Serializer for the data block of a successful validation."""

    key = serializers.CharField()
    fingerprint = serializers.CharField()
    activatedAt = serializers.IntegerField(source="activated_at")
    expiresAt = serializers.IntegerField(source="expires_at")
    user = LicenseHolderSerializer()
    firstActivation = serializers.BooleanField(source="first_activation")
