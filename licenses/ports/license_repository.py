"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from activations.domain.activation import Activation
from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License, LicensePatch, LicenseStats


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def create(self, license: License) -> License:
        """
        Insert a new license.

        Args:
            license: License entity to insert

        Returns:
            Stored license entity

        Raises:
            DuplicateLicenseKeyError: If the key already exists
        """
        pass

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[License]:
        """
        Find a license by key.

        Args:
            key: License key

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[License]:
        """
        List every license, newest first.

        Returns:
            List of License entities ordered by created_at descending
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        key: str,
        patch: LicensePatch,
        only_if_status: Optional[LicenseStatus] = None,
        only_if_activated_at: Optional[int] = None,
    ) -> int:
        """
        Apply a partial update to one license.

        Args:
            key: License key
            patch: Fields to write
            only_if_status: Only update while the stored status equals this
            only_if_activated_at: Only update while the stored activation
                time equals this, so a binding made after a reset is left alone

        Returns:
            Number of rows updated (0 or 1)
        """
        pass

    @abstractmethod
    async def activate(self, key: str, patch: LicensePatch, activation: Activation) -> bool:
        """
        Bind an unused license and record the activation atomically.

        The status update is conditional on the stored status being
        ``unused``; the activation record is only written when that
        update wins.

        Args:
            key: License key
            patch: Activation patch (status, timestamps, fingerprint digest)
            activation: Activation record to append

        Returns:
            True if this call bound the license, False if it was no longer unused
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> int:
        """
        Delete a license and, by cascade, its activation records.

        Args:
            key: License key

        Returns:
            Number of licenses deleted (0 or 1)
        """
        pass

    @abstractmethod
    async def stats(self) -> LicenseStats:
        """
        Count licenses by status.

        Returns:
            LicenseStats with every status present
        """
        pass

    @abstractmethod
    async def find_active_past_expiry(self, current_time: int) -> List[License]:
        """
        Find active licenses whose non-zero expiry is before ``current_time``.

        Args:
            current_time: Time in ms

        Returns:
            List of License entities
        """
        pass
