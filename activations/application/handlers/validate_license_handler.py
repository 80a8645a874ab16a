"""
Validate license handler.

Runs the ActivationEngine and publishes the events its decisions imply.
"""
import logging

from activations.application.commands.validate_license import ValidateLicenseCommand
from activations.application.dto.activation_dto import LicenseHolderDTO, ValidationResultDTO
from activations.domain.events import LicenseActivated
from activations.domain.services import ActivationEngine, ValidationDecision
from core.domain.clock import Clock, now_ms
from core.infrastructure.events import event_bus
from core.metrics import license_validations_total
from licenses.domain.events import LicenseExpired
from licenses.domain.license_key import mask_license_key
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ValidateLicenseHandler:
    """Handler for ValidateLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository, clock: Clock = now_ms):
        """
        Initialize handler.

        Args:
            license_repository: License store
            clock: Returns the current time in ms
        """
        self.engine = ActivationEngine(license_repository, clock=clock)

    async def handle(self, command: ValidateLicenseCommand) -> ValidationResultDTO:
        """
        Handle validate license command.

        Rejections are returned, not raised.

        Args:
            command: ValidateLicenseCommand

        Returns:
            ValidationResultDTO
        """
        decision = await self.engine.validate_and_activate(
            command.license_key,
            command.fingerprint,
            ip_address=command.ip_address,
            user_agent=command.user_agent,
        )

        outcome = "valid" if decision.valid else decision.reason.code.lower()
        license_validations_total.labels(outcome=outcome).inc()

        await self._publish_events(decision)

        if not decision.valid:
            logger.info(
                "License validation rejected",
                extra={
                    "license_key": mask_license_key(command.license_key),
                    "reason": decision.reason.code,
                },
            )
            return ValidationResultDTO(
                valid=False,
                code=decision.reason.code,
                message=decision.reason.message,
            )

        license = decision.license
        return ValidationResultDTO(
            valid=True,
            key=license.key,
            fingerprint=command.fingerprint,
            activated_at=license.activated_at,
            expires_at=license.expires_at,
            user=LicenseHolderDTO(name=license.client_name, email=license.client_email),
            first_activation=decision.first_activation,
        )

    async def _publish_events(self, decision: ValidationDecision) -> None:
        """Publish the events for state changes made by this decision."""
        if decision.first_activation:
            await event_bus.publish(
                LicenseActivated(
                    aggregate_id=decision.license.key,
                    fingerprint_hash=decision.activation.fingerprint_hash,
                    activated_at=decision.license.activated_at,
                    expires_at=decision.license.expires_at,
                )
            )
        if decision.expired_now:
            await event_bus.publish(
                LicenseExpired(
                    aggregate_id=decision.license.key,
                    expires_at=decision.license.expires_at,
                )
            )
