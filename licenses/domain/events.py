"""
License domain events.

Domain events represent something that happened in the license domain.
The aggregate id is the license key.
"""

from dataclasses import dataclass
from typing import Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class LicenseGenerated(DomainEvent):
    """Event raised when a license is generated."""

    license_type: str
    duration_days: int


@dataclass(frozen=True)
class LicenseExpired(DomainEvent):
    """Event raised when an active license is moved to expired."""

    expires_at: Optional[int]


@dataclass(frozen=True)
class LicenseRevoked(DomainEvent):
    """Event raised when a license is revoked."""


@dataclass(frozen=True)
class LicenseReset(DomainEvent):
    """Event raised when a license is returned to unused."""


@dataclass(frozen=True)
class LicenseDeleted(DomainEvent):
    """Event raised when a license and its activation history are deleted."""
