"""
Activation record model.
"""
import uuid

from django.db import models


class Activation(models.Model):
    """
    One successful device binding of a license.

    Rows are removed only through the cascade when their license is deleted.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(
        "licenses.License",
        to_field="key",
        db_column="license_key",
        on_delete=models.CASCADE,
        related_name="activations",
    )
    fingerprint_hash = models.CharField(max_length=64)
    activated_at = models.BigIntegerField(help_text="Milliseconds since epoch")
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(blank=True, default="")

    class Meta:
        db_table = "activations"
        ordering = ["-activated_at"]

    def __str__(self):
        return f"{self.license_id} @ {self.activated_at}"
