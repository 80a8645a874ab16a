"""
Django management command to issue a license from the shell.
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from licenses.application.commands.generate_license import GenerateLicenseCommand
from licenses.application.handlers.generate_license_handler import GenerateLicenseHandler
from licenses.domain.license import MAX_DURATION_DAYS
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository


class Command(BaseCommand):
    """Command to generate a license and print its key."""

    help = "Generate a new unused license and print its key"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("--client-name", help="Customer name")
        parser.add_argument("--client-email", help="Customer email")
        parser.add_argument("--license-type", help="License tag (default: lifetime)")
        parser.add_argument(
            "--duration-days",
            type=int,
            help="Days of validity after first activation, 0 for no expiry",
        )
        parser.add_argument("--notes", help="Free-form notes")

    def handle(self, *args, **options):
        """Execute the command."""
        duration_days = options["duration_days"]
        if duration_days is not None and duration_days < 0:
            raise CommandError("--duration-days must be zero or positive")
        if duration_days is not None and duration_days > MAX_DURATION_DAYS:
            raise CommandError(f"--duration-days cannot exceed {MAX_DURATION_DAYS}")

        handler = GenerateLicenseHandler(
            license_repository=DjangoLicenseRepository(),
            max_attempts=settings.LICENSE_KEY_MAX_ATTEMPTS,
        )
        command = GenerateLicenseCommand(
            client_name=options["client_name"],
            client_email=options["client_email"],
            license_type=options["license_type"],
            duration_days=duration_days,
            notes=options["notes"],
        )
        result = async_to_sync(handler.handle)(command)

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(result.key))
