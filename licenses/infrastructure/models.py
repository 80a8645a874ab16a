"""
License model.
"""
import uuid

from django.db import models

from licenses.domain.license import DEFAULT_CLIENT_EMAIL, DEFAULT_CLIENT_NAME, DEFAULT_LICENSE_TYPE
from licenses.domain.license_key import KEY_LENGTH


class License(models.Model):
    """
    A license key bound to at most one device.

    Timestamps are milliseconds since the epoch. ``expires_at`` is 0 for
    licenses that never expire and NULL until the first activation.
    """

    STATUS_CHOICES = [
        ("unused", "Unused"),
        ("active", "Active"),
        ("expired", "Expired"),
        ("revoked", "Revoked"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key = models.CharField(max_length=KEY_LENGTH, unique=True)
    client_name = models.CharField(max_length=255, default=DEFAULT_CLIENT_NAME)
    client_email = models.CharField(max_length=255, default=DEFAULT_CLIENT_EMAIL)
    license_type = models.CharField(max_length=50, default=DEFAULT_LICENSE_TYPE)
    duration_days = models.PositiveIntegerField(default=0, help_text="0 means never expires")
    notes = models.TextField(blank=True, default="")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="unused")
    created_at = models.BigIntegerField()
    activated_at = models.BigIntegerField(null=True, blank=True)
    expires_at = models.BigIntegerField(null=True, blank=True)
    bound_fingerprint = models.CharField(
        max_length=64, null=True, blank=True, help_text="SHA-256 digest of the bound device fingerprint"
    )

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="licenses_status_idx"),
            models.Index(fields=["status", "expires_at"], name="licenses_status_expiry_idx"),
        ]

    def __str__(self):
        return f"{self.key} ({self.status})"
