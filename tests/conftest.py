"""
Pytest configuration and shared fixtures.
"""

from dataclasses import replace
from typing import Dict, List, Optional

import pytest
from asgiref.sync import async_to_sync
from django.core.cache import cache

from activations.domain.activation import Activation
from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from core.domain.clock import MS_PER_DAY
from core.domain.exceptions import DuplicateLicenseKeyError
from core.domain.value_objects import DeviceFingerprint, LicenseStatus
from licenses.domain.license import License, LicensePatch, LicenseStats
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.ports.license_repository import LicenseRepository

START_TIME = 1_700_000_000_000


class FakeClock:
    """Controllable millisecond clock."""

    def __init__(self, now: int = START_TIME):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance_days(self, days: float) -> None:
        self.now += int(days * MS_PER_DAY)


class InMemoryLicenseRepository(LicenseRepository):
    """LicenseRepository backed by dicts, for tests that need no database."""

    def __init__(self):
        self.licenses: Dict[str, License] = {}
        self.activations: List[Activation] = []

    async def create(self, license: License) -> License:
        if license.key in self.licenses:
            raise DuplicateLicenseKeyError()
        self.licenses[license.key] = license
        return license

    async def find_by_key(self, key: str) -> Optional[License]:
        return self.licenses.get(key)

    async def list_all(self) -> List[License]:
        return sorted(self.licenses.values(), key=lambda l: (l.created_at, l.key), reverse=True)

    async def update_status(
        self,
        key: str,
        patch: LicensePatch,
        only_if_status: Optional[LicenseStatus] = None,
        only_if_activated_at: Optional[int] = None,
    ) -> int:
        license = self.licenses.get(key)
        if license is None:
            return 0
        if only_if_status is not None and license.status != only_if_status:
            return 0
        if only_if_activated_at is not None and license.activated_at != only_if_activated_at:
            return 0
        self.licenses[key] = self._apply(license, patch)
        return 1

    async def activate(self, key: str, patch: LicensePatch, activation: Activation) -> bool:
        license = self.licenses.get(key)
        if license is None or license.status != LicenseStatus.UNUSED:
            return False
        self.licenses[key] = self._apply(license, patch)
        self.activations.append(activation)
        return True

    async def delete(self, key: str) -> int:
        if self.licenses.pop(key, None) is None:
            return 0
        self.activations = [a for a in self.activations if a.license_key != key]
        return 1

    async def stats(self) -> LicenseStats:
        counts = {status.value: 0 for status in LicenseStatus}
        for license in self.licenses.values():
            counts[license.status.value] += 1
        return LicenseStats(**counts)

    async def find_active_past_expiry(self, current_time: int) -> List[License]:
        return [
            license
            for license in self.licenses.values()
            if license.status == LicenseStatus.ACTIVE and license.is_past_expiry(current_time)
        ]

    @staticmethod
    def _apply(license: License, patch: LicensePatch) -> License:
        changes = patch.changes()
        changes["status"] = LicenseStatus(changes["status"])
        return replace(license, **changes)


class RacingLicenseRepository(InMemoryLicenseRepository):
    """
    Simulates another device binding the license between our read and our write.

    The first ``activate`` call applies the rival's binding before running
    the conditional update, so the caller loses the race.
    """

    def __init__(self, rival_fingerprint: str, rival_time: int = START_TIME):
        super().__init__()
        self.rival_hash = DeviceFingerprint(rival_fingerprint).digest
        self.rival_time = rival_time
        self.activate_calls = 0

    async def activate(self, key: str, patch: LicensePatch, activation: Activation) -> bool:
        self.activate_calls += 1
        if self.activate_calls == 1:
            rival = self.licenses[key].activate(self.rival_hash, self.rival_time)
            await super().activate(
                key,
                LicensePatch.activation(rival),
                Activation.create(key, self.rival_hash, self.rival_time),
            )
        return await super().activate(key, patch, activation)


class FlappingLicenseRepository(InMemoryLicenseRepository):
    """Every binding attempt loses, yet every re-read shows the license unused."""

    async def activate(self, key: str, patch: LicensePatch, activation: Activation) -> bool:
        return False


class CollidingLicenseRepository(InMemoryLicenseRepository):
    """Rejects the first ``collisions`` inserts as duplicate keys."""

    def __init__(self, collisions: int):
        super().__init__()
        self.collisions = collisions
        self.attempted_keys: List[str] = []

    async def create(self, license: License) -> License:
        self.attempted_keys.append(license.key)
        if len(self.attempted_keys) <= self.collisions:
            raise DuplicateLicenseKeyError()
        return await super().create(license)


@pytest.fixture(autouse=True)
def clear_cache():
    """Start every test with an empty cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def clock():
    """Fixture for a controllable clock."""
    return FakeClock()


@pytest.fixture
def memory_repository():
    """Fixture for an in-memory LicenseRepository."""
    return InMemoryLicenseRepository()


@pytest.fixture
def sample_license(clock):
    """Fixture for an unused License entity that expires 30 days after activation."""
    return License.create(
        client_name="Maria Silva",
        client_email="maria@example.com",
        license_type="annual",
        duration_days=30,
        created_at=clock(),
    )


@pytest.fixture
def lifetime_license(clock):
    """Fixture for an unused License entity that never expires."""
    return License.create(client_name="Lifetime Client", created_at=clock())


@pytest.fixture
def activation_repository():
    """Fixture for ActivationRepository."""
    return DjangoActivationRepository()


@pytest.fixture
def license_repository(activation_repository):
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository(activation_repository=activation_repository)


@pytest.fixture
def db_license(db, license_repository, sample_license):
    """Fixture for a License saved in database."""
    return async_to_sync(license_repository.create)(sample_license)


@pytest.fixture
def db_lifetime_license(db, license_repository, lifetime_license):
    """Fixture for a never-expiring License saved in database."""
    return async_to_sync(license_repository.create)(lifetime_license)


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def colliding_repository():
    """Factory fixture for a repository that rejects the first N inserts."""
    return CollidingLicenseRepository


@pytest.fixture
def racing_repository():
    """Fixture for a repository where a rival device wins the first binding."""
    return RacingLicenseRepository(rival_fingerprint="dev-rival")


@pytest.fixture
def flapping_repository():
    """Fixture for a repository where binding never wins."""
    return FlappingLicenseRepository()


@pytest.fixture
def published_events(monkeypatch):
    """Record every event published on the global bus while still delivering it."""
    from core.infrastructure.events import event_bus

    events = []
    original_publish = event_bus.publish

    async def recording_publish(event):
        events.append(event)
        await original_publish(event)

    monkeypatch.setattr(event_bus, "publish", recording_publish)
    return events
