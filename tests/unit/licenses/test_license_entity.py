"""
Unit tests for License domain entity.
"""

import pytest

from core.domain.clock import MS_PER_DAY
from core.domain.value_objects import DeviceFingerprint, LicenseStatus
from licenses.domain.license import (
    DEFAULT_CLIENT_EMAIL,
    DEFAULT_CLIENT_NAME,
    License,
    LicensePatch,
    LicenseStats,
    MAX_DURATION_DAYS,
)
from licenses.domain.license_key import is_well_formed

FINGERPRINT = DeviceFingerprint("dev-A").digest


class TestLicenseEntity:
    """Tests for License domain entity."""

    def test_create_license_defaults(self):
        """Test blank metadata falls back to defaults."""
        license = License.create(created_at=1000)

        assert is_well_formed(license.key)
        assert license.client_name == DEFAULT_CLIENT_NAME == "Não especificado"
        assert license.client_email == DEFAULT_CLIENT_EMAIL
        assert license.license_type == "lifetime"
        assert license.duration_days == 0
        assert license.notes == ""
        assert license.status == LicenseStatus.UNUSED
        assert license.created_at == 1000
        assert license.activated_at is None
        assert license.expires_at is None
        assert license.bound_fingerprint is None

    def test_create_license_keeps_given_metadata(self, sample_license):
        """Test given metadata is stored as is."""
        assert sample_license.client_name == "Maria Silva"
        assert sample_license.client_email == "maria@example.com"
        assert sample_license.license_type == "annual"
        assert sample_license.duration_days == 30

    def test_negative_duration_rejected(self):
        """Test negative duration raises."""
        with pytest.raises(ValueError):
            License.create(duration_days=-1)

    def test_oversized_duration_rejected(self):
        with pytest.raises(ValueError):
            License.create(duration_days=MAX_DURATION_DAYS + 1)

    def test_with_new_key(self, sample_license):
        """Test with_new_key changes only the key."""
        rekeyed = sample_license.with_new_key()

        assert rekeyed.key != sample_license.key
        assert rekeyed.client_name == sample_license.client_name
        assert rekeyed.created_at == sample_license.created_at

    def test_activate_sets_window(self, sample_license):
        """Test activation binds the device and computes expiry."""
        active = sample_license.activate(FINGERPRINT, 5000)

        assert active.status == LicenseStatus.ACTIVE
        assert active.activated_at == 5000
        assert active.expires_at == 5000 + 30 * MS_PER_DAY
        assert active.bound_fingerprint == FINGERPRINT
        # Original is unchanged
        assert sample_license.status == LicenseStatus.UNUSED

    def test_activate_lifetime_has_no_expiry(self, lifetime_license):
        """Test duration 0 produces the no-expiry sentinel."""
        active = lifetime_license.activate(FINGERPRINT, 5000)

        assert active.expires_at == 0
        assert not active.is_past_expiry(5000 + 10_000 * MS_PER_DAY)

    def test_activate_requires_unused(self, sample_license):
        """Test an active license cannot be activated again."""
        active = sample_license.activate(FINGERPRINT, 5000)

        with pytest.raises(ValueError, match="unused"):
            active.activate(FINGERPRINT, 6000)

    def test_is_bound_to(self, sample_license):
        """Test binding comparison."""
        active = sample_license.activate(FINGERPRINT, 5000)

        assert active.is_bound_to(FINGERPRINT)
        assert not active.is_bound_to(DeviceFingerprint("dev-B").digest)
        assert not sample_license.is_bound_to(FINGERPRINT)

    def test_is_past_expiry_boundary(self, sample_license):
        """Test expiry is strictly after expires_at."""
        active = sample_license.activate(FINGERPRINT, 0)

        assert not active.is_past_expiry(active.expires_at)
        assert active.is_past_expiry(active.expires_at + 1)

    def test_mark_expired_keeps_binding(self, sample_license):
        """Test expiry only changes the status."""
        expired = sample_license.activate(FINGERPRINT, 5000).mark_expired()

        assert expired.status == LicenseStatus.EXPIRED
        assert expired.bound_fingerprint == FINGERPRINT
        assert expired.activated_at == 5000

    def test_revoke_releases_binding(self, sample_license):
        """Test revoke clears the bound fingerprint."""
        revoked = sample_license.activate(FINGERPRINT, 5000).revoke()

        assert revoked.status == LicenseStatus.REVOKED
        assert revoked.bound_fingerprint is None

    def test_reset_clears_activation(self, sample_license):
        """Test reset returns the license to a fresh unused state."""
        reset = sample_license.activate(FINGERPRINT, 5000).reset()

        assert reset.status == LicenseStatus.UNUSED
        assert reset.activated_at is None
        assert reset.expires_at is None
        assert reset.bound_fingerprint is None


class TestLicensePatch:
    """Tests for LicensePatch."""

    def test_activation_patch_writes_window(self, sample_license):
        active = sample_license.activate(FINGERPRINT, 5000)

        assert LicensePatch.activation(active).changes() == {
            "status": "active",
            "activated_at": 5000,
            "expires_at": active.expires_at,
            "bound_fingerprint": FINGERPRINT,
        }

    def test_expiry_patch_touches_only_status(self):
        assert LicensePatch.expiry().changes() == {"status": "expired"}

    def test_revocation_patch(self):
        assert LicensePatch.revocation().changes() == {"status": "revoked", "bound_fingerprint": None}

    def test_reset_patch(self):
        assert LicensePatch.reset().changes() == {
            "status": "unused",
            "activated_at": None,
            "expires_at": None,
            "bound_fingerprint": None,
        }


class TestLicenseStats:
    """Tests for LicenseStats."""

    def test_total(self):
        stats = LicenseStats(unused=3, active=2, expired=1, revoked=4)

        assert stats.total == 10
        assert stats.to_dict() == {
            "unused": 3,
            "active": 2,
            "expired": 1,
            "revoked": 4,
            "total": 10,
        }
