"""
Activation domain entity.

An activation records one successful device binding of a license.
Records are append-only and disappear only when their license is deleted.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Activation:
    """
    Activation domain entity.

    Holds the fingerprint digest, never the raw fingerprint.
    """

    id: uuid.UUID
    license_key: str
    fingerprint_hash: str
    activated_at: int
    ip_address: Optional[str]
    user_agent: str

    def __post_init__(self):
        """Validate activation entity."""
        if not self.license_key:
            raise ValueError("License key is required")
        if not self.fingerprint_hash or len(self.fingerprint_hash) != 64:
            raise ValueError("Invalid fingerprint hash")

    @classmethod
    def create(
        cls,
        license_key: str,
        fingerprint_hash: str,
        activated_at: int,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        activation_id: Optional[uuid.UUID] = None,
    ) -> "Activation":
        """
        Create a new Activation entity.

        Args:
            license_key: Key of the activated license
            fingerprint_hash: SHA-256 digest of the device fingerprint
            activated_at: Activation time in ms
            ip_address: Requesting client address
            user_agent: Requesting client user agent
            activation_id: Optional UUID (generated if not provided)

        Returns:
            Activation entity instance
        """
        return cls(
            id=activation_id or uuid.uuid4(),
            license_key=license_key,
            fingerprint_hash=fingerprint_hash,
            activated_at=activated_at,
            ip_address=ip_address or None,
            user_agent=user_agent or "",
        )
