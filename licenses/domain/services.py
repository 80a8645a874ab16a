"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import logging

from core.domain.exceptions import LicenseNotFoundError
from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License, LicensePatch
from licenses.domain.license_key import mask_license_key
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class LicenseLifecycleManager:
    """Domain service for administrative license transitions."""

    @staticmethod
    async def revoke(key: str, license_repository: LicenseRepository) -> None:
        """
        Revoke a license regardless of its current status.

        Args:
            key: License key
            license_repository: Repository for persistence

        Raises:
            LicenseNotFoundError: If no license has this key
        """
        updated = await license_repository.update_status(key, LicensePatch.revocation())
        if updated == 0:
            raise LicenseNotFoundError()
        logger.info("License revoked", extra={"license_key": mask_license_key(key)})

    @staticmethod
    async def reset(key: str, license_repository: LicenseRepository) -> None:
        """
        Return a license to unused, clearing its binding and activation window.

        Args:
            key: License key
            license_repository: Repository for persistence

        Raises:
            LicenseNotFoundError: If no license has this key
        """
        updated = await license_repository.update_status(key, LicensePatch.reset())
        if updated == 0:
            raise LicenseNotFoundError()
        logger.info("License reset to unused", extra={"license_key": mask_license_key(key)})

    @staticmethod
    async def expire(license: License, license_repository: LicenseRepository) -> bool:
        """
        Move an active license to expired.

        The write only applies while the stored license is still active with
        the activation time observed in ``license``. A concurrent revoke, or a
        reset followed by a fresh binding, is never overwritten.

        Args:
            license: License observed as active and past its expiry
            license_repository: Repository for persistence

        Returns:
            True if this call performed the transition
        """
        updated = await license_repository.update_status(
            license.key,
            LicensePatch.expiry(),
            only_if_status=LicenseStatus.ACTIVE,
            only_if_activated_at=license.activated_at,
        )
        if updated:
            logger.info(
                "License expired",
                extra={"license_key": mask_license_key(license.key), "expires_at": license.expires_at},
            )
        return updated == 1
