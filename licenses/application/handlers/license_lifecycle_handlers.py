"""
License lifecycle handlers.

Handlers for revoke, reset, delete and the expiry sweep.
"""
import logging

from core.domain.clock import now_ms
from core.domain.exceptions import LicenseNotFoundError
from core.infrastructure.events import event_bus
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.expire_overdue_licenses import ExpireOverdueLicensesCommand
from licenses.application.commands.reset_license import ResetLicenseCommand
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.application.dto.license_dto import ExpirySweepResultDTO, LicenseDTO
from licenses.domain.events import LicenseDeleted, LicenseExpired, LicenseReset, LicenseRevoked
from licenses.domain.license_key import mask_license_key
from licenses.domain.services import LicenseLifecycleManager
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class RevokeLicenseHandler:
    """Handler for RevokeLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: RevokeLicenseCommand) -> None:
        """
        Handle revoke license command.

        Args:
            command: RevokeLicenseCommand

        Raises:
            LicenseNotFoundError: If license not found
        """
        await LicenseLifecycleManager.revoke(command.license_key, self.license_repository)
        await event_bus.publish(LicenseRevoked(aggregate_id=command.license_key))


class ResetLicenseHandler:
    """Handler for ResetLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: ResetLicenseCommand) -> None:
        """
        Handle reset license command.

        Args:
            command: ResetLicenseCommand

        Raises:
            LicenseNotFoundError: If license not found
        """
        await LicenseLifecycleManager.reset(command.license_key, self.license_repository)
        await event_bus.publish(LicenseReset(aggregate_id=command.license_key))


class DeleteLicenseHandler:
    """Handler for DeleteLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: DeleteLicenseCommand) -> None:
        """
        Handle delete license command.

        Args:
            command: DeleteLicenseCommand

        Raises:
            LicenseNotFoundError: If license not found
        """
        deleted = await self.license_repository.delete(command.license_key)
        if deleted == 0:
            raise LicenseNotFoundError()

        logger.info("License deleted", extra={"license_key": mask_license_key(command.license_key)})
        await event_bus.publish(LicenseDeleted(aggregate_id=command.license_key))


class ExpireOverdueLicensesHandler:
    """
    Handler for ExpireOverdueLicensesCommand.

    Applies the same guarded active -> expired transition that validation
    applies lazily, to every overdue license at once.
    """

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: ExpireOverdueLicensesCommand) -> ExpirySweepResultDTO:
        """
        Handle expiry sweep command.

        Args:
            command: ExpireOverdueLicensesCommand

        Returns:
            ExpirySweepResultDTO listing the overdue licenses found
        """
        current_time = command.current_time if command.current_time is not None else now_ms()
        overdue = await self.license_repository.find_active_past_expiry(current_time)

        expired = 0
        if not command.dry_run:
            for license in overdue:
                if await LicenseLifecycleManager.expire(license, self.license_repository):
                    expired += 1
                    await event_bus.publish(
                        LicenseExpired(aggregate_id=license.key, expires_at=license.expires_at)
                    )

        logger.info(
            "Expiry sweep finished",
            extra={"overdue": len(overdue), "expired": expired, "dry_run": command.dry_run},
        )
        return ExpirySweepResultDTO(
            overdue=[LicenseDTO.from_entity(license) for license in overdue],
            expired=expired,
            dry_run=command.dry_run,
        )
