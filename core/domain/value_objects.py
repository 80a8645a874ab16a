"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import hashlib
from abc import ABC
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


class LicenseStatus(Enum):
    """License status value object."""

    UNUSED = "unused"
    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value

    @property
    def is_terminal(self) -> bool:
        """Expired and revoked licenses only leave their state through a reset."""
        return self in (LicenseStatus.EXPIRED, LicenseStatus.REVOKED)


@dataclass(frozen=True)
class DeviceFingerprint(ValueObject):
    """
    Caller-supplied device identifier.

    The raw value is only held in memory; persistence and comparison use
    the SHA-256 digest.
    """

    value: str

    def __post_init__(self):
        """Validate fingerprint."""
        if not self.value:
            raise ValueError("Device fingerprint cannot be empty")

    @property
    def digest(self) -> str:
        """Hex-encoded SHA-256 digest of the fingerprint."""
        return hashlib.sha256(self.value.encode("utf-8")).hexdigest()

    def __str__(self) -> str:
        """Return the digest, never the raw fingerprint."""
        return self.digest
