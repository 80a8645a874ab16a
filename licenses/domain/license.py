"""
License domain entity.

This is the core domain entity representing a device-bound license.
It contains business logic and is independent of infrastructure.
"""
import secrets
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from core.domain.clock import MS_PER_DAY, now_ms
from core.domain.value_objects import LicenseStatus
from licenses.domain.license_key import generate_license_key

DEFAULT_CLIENT_NAME = "Não especificado"
DEFAULT_CLIENT_EMAIL = "Não especificado"
DEFAULT_LICENSE_TYPE = "lifetime"
NO_EXPIRY = 0
# Largest value every supported database stores in duration_days.
MAX_DURATION_DAYS = 2_147_483_647


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    A license starts ``unused``, is bound to the first device that
    validates it and from then on only accepts that device. Timestamps
    are milliseconds since the epoch; ``expires_at == 0`` means the
    license never expires.
    """

    key: str
    client_name: str
    client_email: str
    license_type: str
    duration_days: int
    notes: str
    status: LicenseStatus
    created_at: int
    activated_at: Optional[int] = None
    expires_at: Optional[int] = None
    bound_fingerprint: Optional[str] = None

    def __post_init__(self):
        """Validate license entity."""
        if not self.key:
            raise ValueError("License key is required")
        if self.duration_days < 0:
            raise ValueError("Duration days cannot be negative")
        if self.duration_days > MAX_DURATION_DAYS:
            raise ValueError(f"Duration days cannot exceed {MAX_DURATION_DAYS}")

    @classmethod
    def create(
        cls,
        client_name: Optional[str] = None,
        client_email: Optional[str] = None,
        license_type: Optional[str] = None,
        duration_days: Optional[int] = None,
        notes: Optional[str] = None,
        key: Optional[str] = None,
        created_at: Optional[int] = None,
    ) -> "License":
        """
        Create a new unused License entity.

        Blank metadata falls back to the defaults.

        Args:
            client_name: Customer name
            client_email: Customer email (stored as given, never validated)
            license_type: Free-form license tag
            duration_days: Days of validity after first activation, 0 for no expiry
            notes: Free-form notes
            key: License key (generated if not provided)
            created_at: Creation time in ms (defaults to now)

        Returns:
            License entity instance
        """
        return cls(
            key=key or generate_license_key(),
            client_name=client_name or DEFAULT_CLIENT_NAME,
            client_email=client_email or DEFAULT_CLIENT_EMAIL,
            license_type=license_type or DEFAULT_LICENSE_TYPE,
            duration_days=duration_days or 0,
            notes=notes or "",
            status=LicenseStatus.UNUSED,
            created_at=created_at if created_at is not None else now_ms(),
        )

    def with_new_key(self) -> "License":
        """Return a copy carrying a freshly generated key."""
        return replace(self, key=generate_license_key())

    def expiry_for(self, activated_at: int) -> int:
        """
        Compute the expiry timestamp for an activation at ``activated_at``.

        Returns:
            ``activated_at + duration_days`` in ms, or 0 when the license never expires
        """
        if self.duration_days == 0:
            return NO_EXPIRY
        return activated_at + self.duration_days * MS_PER_DAY

    def is_bound_to(self, fingerprint_hash: str) -> bool:
        """Check whether the license is bound to the given fingerprint digest."""
        if not self.bound_fingerprint:
            return False
        return secrets.compare_digest(self.bound_fingerprint, fingerprint_hash)

    def is_past_expiry(self, current_time: int) -> bool:
        """Check whether ``current_time`` is past a non-zero expiry."""
        return bool(self.expires_at) and current_time > self.expires_at

    def activate(self, fingerprint_hash: str, activated_at: int) -> "License":
        """
        Create a new License instance bound to a device.

        Args:
            fingerprint_hash: Digest of the device fingerprint
            activated_at: Activation time in ms

        Returns:
            New License instance with active status
        """
        if self.status != LicenseStatus.UNUSED:
            raise ValueError("Only an unused license can be activated")

        return replace(
            self,
            status=LicenseStatus.ACTIVE,
            activated_at=activated_at,
            expires_at=self.expiry_for(activated_at),
            bound_fingerprint=fingerprint_hash,
        )

    def mark_expired(self) -> "License":
        """
        Create a new License instance with expired status.

        Returns:
            New License instance with expired status
        """
        return replace(self, status=LicenseStatus.EXPIRED)

    def revoke(self) -> "License":
        """
        Create a new License instance with revoked status.

        The device binding is released; activation history keeps the digest.

        Returns:
            New License instance with revoked status
        """
        return replace(self, status=LicenseStatus.REVOKED, bound_fingerprint=None)

    def reset(self) -> "License":
        """
        Create a new License instance returned to the unused state.

        Returns:
            New License instance with no binding and no activation window
        """
        return replace(
            self,
            status=LicenseStatus.UNUSED,
            activated_at=None,
            expires_at=None,
            bound_fingerprint=None,
        )


_UNCHANGED = object()


@dataclass(frozen=True)
class LicensePatch:
    """
    Partial update applied to one stored license.

    Only the fields a transition touches are written; the rest are left
    as stored.
    """

    status: LicenseStatus
    activated_at: Any = _UNCHANGED
    expires_at: Any = _UNCHANGED
    bound_fingerprint: Any = _UNCHANGED

    @classmethod
    def activation(cls, license: License) -> "LicensePatch":
        """Patch that persists a freshly activated license."""
        return cls(
            status=LicenseStatus.ACTIVE,
            activated_at=license.activated_at,
            expires_at=license.expires_at,
            bound_fingerprint=license.bound_fingerprint,
        )

    @classmethod
    def expiry(cls) -> "LicensePatch":
        return cls(status=LicenseStatus.EXPIRED)

    @classmethod
    def revocation(cls) -> "LicensePatch":
        return cls(status=LicenseStatus.REVOKED, bound_fingerprint=None)

    @classmethod
    def reset(cls) -> "LicensePatch":
        return cls(
            status=LicenseStatus.UNUSED,
            activated_at=None,
            expires_at=None,
            bound_fingerprint=None,
        )

    def changes(self) -> Dict[str, Any]:
        """Column values to write, keyed by field name."""
        fields = {"status": self.status.value}
        for name in ("activated_at", "expires_at", "bound_fingerprint"):
            value = getattr(self, name)
            if value is not _UNCHANGED:
                fields[name] = value
        return fields


@dataclass(frozen=True)
class LicenseStats:
    """License counts by status."""

    unused: int = 0
    active: int = 0
    expired: int = 0
    revoked: int = 0

    @property
    def total(self) -> int:
        return self.unused + self.active + self.expired + self.revoked

    def to_dict(self) -> Dict[str, int]:
        """Counts including the total."""
        return {
            "unused": self.unused,
            "active": self.active,
            "expired": self.expired,
            "revoked": self.revoked,
            "total": self.total,
        }
