"""
Generate license handler.

Issues a new unused license, retrying key generation on collision.
"""
import logging

from core.domain.exceptions import DuplicateLicenseKeyError, LicenseKeyAllocationError
from core.infrastructure.events import event_bus
from core.metrics import license_key_collisions_total
from licenses.application.commands.generate_license import GenerateLicenseCommand
from licenses.application.dto.license_dto import LicenseDTO
from licenses.domain.events import LicenseGenerated
from licenses.domain.license import License
from licenses.domain.license_key import mask_license_key
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5


class GenerateLicenseHandler:
    """Handler for GenerateLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        """
        Initialize handler.

        Args:
            license_repository: License store
            max_attempts: Keys to try before giving up on collisions
        """
        self.license_repository = license_repository
        self.max_attempts = max(1, max_attempts)

    async def handle(self, command: GenerateLicenseCommand) -> LicenseDTO:
        """
        Handle generate license command.

        Args:
            command: GenerateLicenseCommand

        Returns:
            LicenseDTO of the stored license

        Raises:
            LicenseKeyAllocationError: If every generated key collided
        """
        license = License.create(
            client_name=command.client_name,
            client_email=command.client_email,
            license_type=command.license_type,
            duration_days=command.duration_days,
            notes=command.notes,
        )

        for attempt in range(1, self.max_attempts + 1):
            try:
                stored = await self.license_repository.create(license)
                break
            except DuplicateLicenseKeyError:
                license_key_collisions_total.inc()
                logger.warning(
                    "Generated license key collided, retrying",
                    extra={"attempt": attempt, "license_key": mask_license_key(license.key)},
                )
                license = license.with_new_key()
        else:
            raise LicenseKeyAllocationError()

        logger.info(
            "License generated",
            extra={
                "license_key": mask_license_key(stored.key),
                "license_type": stored.license_type,
                "duration_days": stored.duration_days,
            },
        )

        await event_bus.publish(
            LicenseGenerated(
                aggregate_id=stored.key,
                license_type=stored.license_type,
                duration_days=stored.duration_days,
            )
        )

        return LicenseDTO.from_entity(stored)
