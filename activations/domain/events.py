"""
Activation domain events.
"""

from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class LicenseActivated(DomainEvent):
    """Event raised when an unused license is bound to a device."""

    fingerprint_hash: str
    activated_at: int
    expires_at: int
