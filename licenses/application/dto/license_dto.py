"""
License DTOs for API responses.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from activations.domain.activation import Activation
from licenses.domain.license import License


@dataclass
class LicenseDTO:
    """DTO for license information."""

    key: str
    client_name: str
    client_email: str
    license_type: str
    duration_days: int
    notes: str
    status: str
    created_at: int
    activated_at: Optional[int]
    expires_at: Optional[int]
    bound_fingerprint: Optional[str]

    @classmethod
    def from_entity(cls, license: License) -> "LicenseDTO":
        """Build the DTO from a License entity."""
        return cls(
            key=license.key,
            client_name=license.client_name,
            client_email=license.client_email,
            license_type=license.license_type,
            duration_days=license.duration_days,
            notes=license.notes,
            status=license.status.value,
            created_at=license.created_at,
            activated_at=license.activated_at,
            expires_at=license.expires_at,
            bound_fingerprint=license.bound_fingerprint,
        )


@dataclass
class ActivationRecordDTO:
    """DTO for one activation record."""

    fingerprint_hash: str
    activated_at: int
    ip_address: Optional[str]
    user_agent: str

    @classmethod
    def from_entity(cls, activation: Activation) -> "ActivationRecordDTO":
        return cls(
            fingerprint_hash=activation.fingerprint_hash,
            activated_at=activation.activated_at,
            ip_address=activation.ip_address,
            user_agent=activation.user_agent,
        )


@dataclass
class LicenseDetailDTO(LicenseDTO):
    """DTO for a license together with its activation history."""

    activations: List[ActivationRecordDTO] = field(default_factory=list)


@dataclass
class LicenseStatsDTO:
    """DTO for license counts by status."""

    unused: int
    active: int
    expired: int
    revoked: int
    total: int


@dataclass
class ExpirySweepResultDTO:
    """DTO for the result of an expiry sweep."""

    overdue: List[LicenseDTO]
    expired: int
    dry_run: bool
