"""
Unit tests for ValidateLicenseHandler.
"""

import pytest

from activations.application.commands.validate_license import ValidateLicenseCommand
from activations.application.handlers.validate_license_handler import ValidateLicenseHandler
from activations.domain.events import LicenseActivated
from licenses.domain.events import LicenseExpired
from licenses.domain.license import License
from licenses.domain.services import LicenseLifecycleManager


class TestValidateLicenseHandler:
    """Tests for ValidateLicenseHandler."""

    @pytest.mark.asyncio
    async def test_first_activation_result(self, memory_repository, sample_license, clock, published_events):
        """Test the success payload and the activation event."""
        await memory_repository.create(sample_license)
        handler = ValidateLicenseHandler(memory_repository, clock=clock)

        result = await handler.handle(ValidateLicenseCommand(sample_license.key, "dev-A"))

        assert result.valid is True
        assert result.code is None
        assert result.key == sample_license.key
        assert result.fingerprint == "dev-A"
        assert result.activated_at == clock()
        assert result.user.name == "Maria Silva"
        assert result.user.email == "maria@example.com"
        assert result.first_activation is True
        assert [type(e) for e in published_events] == [LicenseActivated]

    @pytest.mark.asyncio
    async def test_revalidation_publishes_nothing(self, memory_repository, sample_license, clock, published_events):
        await memory_repository.create(sample_license)
        handler = ValidateLicenseHandler(memory_repository, clock=clock)
        await handler.handle(ValidateLicenseCommand(sample_license.key, "dev-A"))
        published_events.clear()

        result = await handler.handle(ValidateLicenseCommand(sample_license.key, "dev-A"))

        assert result.valid is True
        assert result.first_activation is False
        assert published_events == []

    @pytest.mark.asyncio
    async def test_rejection_result(self, memory_repository, sample_license, clock):
        await memory_repository.create(sample_license)
        handler = ValidateLicenseHandler(memory_repository, clock=clock)
        await handler.handle(ValidateLicenseCommand(sample_license.key, "dev-A"))

        result = await handler.handle(ValidateLicenseCommand(sample_license.key, "dev-B"))

        assert result.valid is False
        assert result.code == "DEVICE_MISMATCH"
        assert result.message == "License already activated on another device"
        assert result.key is None

    @pytest.mark.asyncio
    async def test_lazy_expiry_publishes_event_once(self, memory_repository, clock, published_events):
        license = await memory_repository.create(License.create(duration_days=1, created_at=clock()))
        handler = ValidateLicenseHandler(memory_repository, clock=clock)
        await handler.handle(ValidateLicenseCommand(license.key, "dev-A"))
        clock.advance_days(2)
        published_events.clear()

        first = await handler.handle(ValidateLicenseCommand(license.key, "dev-A"))
        second = await handler.handle(ValidateLicenseCommand(license.key, "dev-A"))

        assert first.code == second.code == "LICENSE_EXPIRED"
        assert [type(e) for e in published_events] == [LicenseExpired]

    @pytest.mark.asyncio
    async def test_reset_allows_new_device(self, memory_repository, sample_license, clock):
        """Test a reset license binds to a different device."""
        await memory_repository.create(sample_license)
        handler = ValidateLicenseHandler(memory_repository, clock=clock)
        await handler.handle(ValidateLicenseCommand(sample_license.key, "dev-A"))

        await LicenseLifecycleManager.reset(sample_license.key, memory_repository)
        clock.advance_days(1)
        result = await handler.handle(ValidateLicenseCommand(sample_license.key, "dev-B"))

        assert result.valid is True
        assert result.first_activation is True
        assert result.activated_at == clock()
        assert len(memory_repository.activations) == 2
