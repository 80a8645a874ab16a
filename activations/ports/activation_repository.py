"""
Activation repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import List

from activations.domain.activation import Activation


class ActivationRepository(ABC):
    """
    Abstract repository for Activation records.

    Records are append-only; there is no update or delete operation.
    """

    @abstractmethod
    async def append(self, activation: Activation) -> Activation:
        """
        Append an activation record.

        Args:
            activation: Activation entity to store

        Returns:
            Stored activation entity
        """
        pass

    @abstractmethod
    async def find_by_license_key(self, license_key: str) -> List[Activation]:
        """
        Find all activation records of a license, newest first.

        Args:
            license_key: License key

        Returns:
            List of Activation entities (empty if none or the license is gone)
        """
        pass
