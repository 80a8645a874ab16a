"""
Activation domain services.

The ActivationEngine decides whether a device may use a license and
applies the resulting status transition. It keeps no state between
calls; every decision is made against the stored license.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from activations.domain.activation import Activation
from core.domain.clock import Clock, now_ms
from core.domain.exceptions import ActivationConflictError
from core.domain.value_objects import DeviceFingerprint, LicenseStatus
from licenses.domain.license import License, LicensePatch
from licenses.domain.license_key import is_well_formed, mask_license_key
from licenses.domain.services import LicenseLifecycleManager
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class RejectionReason(Enum):
    """Why a validation request was refused."""

    INVALID_REQUEST = "License key and fingerprint are required"
    LICENSE_NOT_FOUND = "License not found"
    DEVICE_MISMATCH = "License already activated on another device"
    LICENSE_EXPIRED = "License expired"
    LICENSE_REVOKED = "License revoked"

    @property
    def code(self) -> str:
        return self.name

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class ValidationDecision:
    """
    Outcome of one validate-and-activate call.

    Attributes:
        valid: Whether the device may use the license
        license: License state after the call (None if not found or malformed)
        reason: Rejection reason when ``valid`` is False
        activation: Activation record written by a first binding
        expired_now: True when this call moved the license to expired
    """

    valid: bool
    license: Optional[License] = None
    reason: Optional[RejectionReason] = None
    activation: Optional[Activation] = None
    expired_now: bool = False

    @property
    def first_activation(self) -> bool:
        return self.activation is not None

    @classmethod
    def accept(cls, license: License, activation: Optional[Activation] = None) -> "ValidationDecision":
        return cls(valid=True, license=license, activation=activation)

    @classmethod
    def reject(
        cls,
        reason: RejectionReason,
        license: Optional[License] = None,
        expired_now: bool = False,
    ) -> "ValidationDecision":
        return cls(valid=False, license=license, reason=reason, expired_now=expired_now)


class ActivationEngine:
    """
    Domain service for license validation and device binding.

    State machine::

        unused --(first validate)--> active --(validate past expiry)--> expired
        any ----(revoke)-----------> revoked
        any ----(reset)------------> unused

    Binding uses a conditional update that only succeeds while the stored
    status is still ``unused``. A caller that loses the race re-reads the
    license and is judged against the binding the winner wrote.
    """

    MAX_BIND_ATTEMPTS = 3

    def __init__(self, license_repository: LicenseRepository, clock: Clock = now_ms):
        """
        Initialize engine.

        Args:
            license_repository: License store
            clock: Returns the current time in ms
        """
        self.license_repository = license_repository
        self.clock = clock

    async def validate_and_activate(
        self,
        license_key: str,
        fingerprint: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> ValidationDecision:
        """
        Validate a (license key, device fingerprint) pair.

        Binds the license to the device on first use, re-validates the
        bound device afterwards and applies lazy expiry.

        Args:
            license_key: License key presented by the client
            fingerprint: Raw device fingerprint presented by the client
            ip_address: Client address, recorded on first binding
            user_agent: Client user agent, recorded on first binding

        Returns:
            ValidationDecision

        Raises:
            ActivationConflictError: If the license kept changing state
                between reads (for example reset in a tight loop)
        """
        if not license_key or not fingerprint:
            return ValidationDecision.reject(RejectionReason.INVALID_REQUEST)

        if not is_well_formed(license_key):
            return ValidationDecision.reject(RejectionReason.LICENSE_NOT_FOUND)

        fingerprint_hash = DeviceFingerprint(fingerprint).digest

        for _ in range(self.MAX_BIND_ATTEMPTS):
            license = await self.license_repository.find_by_key(license_key)
            if license is None:
                return ValidationDecision.reject(RejectionReason.LICENSE_NOT_FOUND)

            if license.status != LicenseStatus.UNUSED:
                return await self._check_bound_license(license, fingerprint_hash)

            decision = await self._bind(license, fingerprint_hash, ip_address, user_agent)
            if decision is not None:
                return decision

            logger.info(
                "Lost activation race, re-reading license",
                extra={"license_key": mask_license_key(license_key)},
            )

        logger.warning(
            "License state kept changing during activation",
            extra={"license_key": mask_license_key(license_key)},
        )
        raise ActivationConflictError()

    async def _bind(
        self,
        license: License,
        fingerprint_hash: str,
        ip_address: Optional[str],
        user_agent: Optional[str],
    ) -> Optional[ValidationDecision]:
        """
        Attempt the unused -> active transition.

        Returns:
            Accepting decision, or None if another caller changed the license first
        """
        activated_at = self.clock()
        bound = license.activate(fingerprint_hash, activated_at)
        activation = Activation.create(
            license_key=license.key,
            fingerprint_hash=fingerprint_hash,
            activated_at=activated_at,
            ip_address=ip_address,
            user_agent=user_agent,
        )

        won = await self.license_repository.activate(
            license.key, LicensePatch.activation(bound), activation
        )
        if not won:
            return None

        logger.info(
            "License bound to device",
            extra={
                "license_key": mask_license_key(license.key),
                "activated_at": bound.activated_at,
                "expires_at": bound.expires_at,
            },
        )
        return ValidationDecision.accept(bound, activation)

    async def _check_bound_license(self, license: License, fingerprint_hash: str) -> ValidationDecision:
        """
        Judge a license that has left the unused state.

        Expired and revoked licenses are refused without looking at the
        fingerprint.
        """
        if license.status.is_terminal:
            reason = (
                RejectionReason.LICENSE_REVOKED
                if license.status == LicenseStatus.REVOKED
                else RejectionReason.LICENSE_EXPIRED
            )
            return ValidationDecision.reject(reason, license)

        if not license.is_bound_to(fingerprint_hash):
            return ValidationDecision.reject(RejectionReason.DEVICE_MISMATCH, license)

        if license.is_past_expiry(self.clock()):
            expired_now = await LicenseLifecycleManager.expire(license, self.license_repository)
            return ValidationDecision.reject(
                RejectionReason.LICENSE_EXPIRED, license.mark_expired(), expired_now=expired_now
            )

        return ValidationDecision.accept(license)
