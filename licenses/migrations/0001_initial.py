import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="License",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("key", models.CharField(max_length=19, unique=True)),
                ("client_name", models.CharField(default="Não especificado", max_length=255)),
                ("client_email", models.CharField(default="Não especificado", max_length=255)),
                ("license_type", models.CharField(default="lifetime", max_length=50)),
                (
                    "duration_days",
                    models.PositiveIntegerField(default=0, help_text="0 means never expires"),
                ),
                ("notes", models.TextField(blank=True, default="")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("unused", "Unused"),
                            ("active", "Active"),
                            ("expired", "Expired"),
                            ("revoked", "Revoked"),
                        ],
                        default="unused",
                        max_length=20,
                    ),
                ),
                ("created_at", models.BigIntegerField()),
                ("activated_at", models.BigIntegerField(blank=True, null=True)),
                ("expires_at", models.BigIntegerField(blank=True, null=True)),
                (
                    "bound_fingerprint",
                    models.CharField(
                        blank=True,
                        help_text="SHA-256 digest of the bound device fingerprint",
                        max_length=64,
                        null=True,
                    ),
                ),
            ],
            options={
                "db_table": "licenses",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status"], name="licenses_status_idx"),
                    models.Index(fields=["status", "expires_at"], name="licenses_status_expiry_idx"),
                ],
            },
        ),
    ]
