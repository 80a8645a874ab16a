"""
Unit tests for the in-memory event bus and the event handlers.
"""

import logging

import pytest
from prometheus_client import REGISTRY

from core.domain.events import EventHandler
from core.infrastructure.event_handlers import (
    AuditLogEventHandler,
    MetricsEventHandler,
    StatsCacheInvalidationHandler,
)
from core.infrastructure.events import InMemoryEventBus
from licenses.application.dto.license_dto import LicenseStatsDTO
from licenses.application.services.license_cache_service import LicenseStatsCacheService
from licenses.domain.events import LicenseGenerated, LicenseRevoked


class RecordingHandler(EventHandler):
    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


class FailingHandler(EventHandler):
    async def handle(self, event):
        raise RuntimeError("handler failed")


class TestInMemoryEventBus:
    """Tests for InMemoryEventBus."""

    @pytest.mark.asyncio
    async def test_delivers_to_subscribers_of_type(self):
        bus = InMemoryEventBus()
        revoked_handler = RecordingHandler()
        generated_handler = RecordingHandler()
        bus.subscribe(LicenseRevoked, revoked_handler)
        bus.subscribe(LicenseGenerated, generated_handler)

        event = LicenseRevoked(aggregate_id="AAAA-BBBB-CCCC-DDDD")
        await bus.publish(event)

        assert revoked_handler.events == [event]
        assert generated_handler.events == []

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_block_others(self, caplog):
        bus = InMemoryEventBus()
        recording = RecordingHandler()
        bus.subscribe(LicenseRevoked, FailingHandler())
        bus.subscribe(LicenseRevoked, recording)

        with caplog.at_level(logging.ERROR, logger="core.infrastructure.events"):
            await bus.publish(LicenseRevoked(aggregate_id="AAAA-BBBB-CCCC-DDDD"))

        assert len(recording.events) == 1
        assert "FailingHandler" in caplog.text

    @pytest.mark.asyncio
    async def test_publish_without_subscribers(self):
        await InMemoryEventBus().publish(LicenseRevoked(aggregate_id="AAAA-BBBB-CCCC-DDDD"))


class TestDomainEvent:
    """Tests for DomainEvent stamping."""

    def test_event_metadata(self):
        event = LicenseGenerated(aggregate_id="AAAA-BBBB-CCCC-DDDD", license_type="annual", duration_days=30)

        assert event.event_type == "LicenseGenerated"
        assert event.event_id is not None
        data = event.to_dict()
        assert data["aggregate_id"] == "AAAA-BBBB-CCCC-DDDD"
        assert data["event_type"] == "LicenseGenerated"


class TestEventHandlers:
    """Tests for the registered side-effect handlers."""

    @pytest.mark.asyncio
    async def test_audit_log_masks_key(self, caplog):
        with caplog.at_level(logging.INFO, logger="core.infrastructure.event_handlers"):
            await AuditLogEventHandler().handle(LicenseRevoked(aggregate_id="AB12-CD34-EF56-GH78"))

        assert "AB12-****" in caplog.text
        assert "CD34" not in caplog.text

    @pytest.mark.asyncio
    async def test_metrics_handler_counts(self):
        before = REGISTRY.get_sample_value("licenses_revoked_total") or 0.0

        await MetricsEventHandler().handle(LicenseRevoked(aggregate_id="AB12-CD34-EF56-GH78"))

        assert REGISTRY.get_sample_value("licenses_revoked_total") == before + 1

    @pytest.mark.asyncio
    async def test_cache_invalidation(self):
        await LicenseStatsCacheService.set_stats(
            LicenseStatsDTO(unused=1, active=0, expired=0, revoked=0, total=1)
        )
        assert await LicenseStatsCacheService.get_stats() is not None

        await StatsCacheInvalidationHandler().handle(LicenseRevoked(aggregate_id="AB12-CD34-EF56-GH78"))

        assert await LicenseStatsCacheService.get_stats() is None
