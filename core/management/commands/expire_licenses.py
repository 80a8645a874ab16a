"""
Django management command to expire overdue licenses.

Validation already expires licenses lazily; this sweep lets an operator
flip every overdue license at once. Nothing schedules it.
"""

import logging

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from licenses.application.commands.expire_overdue_licenses import ExpireOverdueLicensesCommand
from licenses.application.handlers.license_lifecycle_handlers import ExpireOverdueLicensesHandler
from licenses.domain.license_key import mask_license_key
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

logger = logging.getLogger(__name__)

PREVIEW_LIMIT = 10


class Command(BaseCommand):
    """Command to mark overdue active licenses as expired."""

    help = "Mark active licenses past their expiry as expired"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - don't actually update licenses",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        dry_run = options["dry_run"]
        handler = ExpireOverdueLicensesHandler(license_repository=DjangoLicenseRepository())

        result = async_to_sync(handler.handle)(ExpireOverdueLicensesCommand(dry_run=dry_run))

        self.stdout.write(f"Found {len(result.overdue)} overdue license(s)")

        if dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))
            for license in result.overdue[:PREVIEW_LIMIT]:
                self.stdout.write(
                    f"  - License {mask_license_key(license.key)} expired at {license.expires_at}"
                )
            return

        if not result.overdue:
            # pylint: disable=no-member
            self.stdout.write(self.style.SUCCESS("No overdue licenses to update"))
            return

        self.stdout.write(
            # pylint: disable=no-member
            self.style.SUCCESS(f"Successfully marked {result.expired} license(s) as expired")
        )
