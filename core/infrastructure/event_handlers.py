"""
Event handlers for domain events.

These handlers process domain events for side effects: audit logging,
Prometheus counters and stats cache invalidation.
"""

import logging

from activations.domain.events import LicenseActivated
from core import metrics
from core.domain.events import DomainEvent, EventHandler
from licenses.domain.events import (
    LicenseDeleted,
    LicenseExpired,
    LicenseGenerated,
    LicenseReset,
    LicenseRevoked,
)
from licenses.domain.license_key import mask_license_key

logger = logging.getLogger(__name__)

LICENSE_EVENTS = (
    LicenseGenerated,
    LicenseActivated,
    LicenseExpired,
    LicenseRevoked,
    LicenseReset,
    LicenseDeleted,
)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes one structured log line per domain event. The license key is
    masked since it is the customer's credential.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        license_key = mask_license_key(event.aggregate_id)
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            license_key,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "license_key": license_key,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )


class MetricsEventHandler(EventHandler):
    """Event handler that keeps the Prometheus business counters current."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Increment the counter matching the event.

        Args:
            event: Domain event
        """
        if isinstance(event, LicenseGenerated):
            metrics.licenses_generated_total.labels(license_type=event.license_type).inc()
        elif isinstance(event, LicenseActivated):
            metrics.licenses_activated_total.inc()
        elif isinstance(event, LicenseExpired):
            metrics.licenses_expired_total.inc()
        elif isinstance(event, LicenseRevoked):
            metrics.licenses_revoked_total.inc()
        elif isinstance(event, LicenseReset):
            metrics.licenses_reset_total.inc()
        elif isinstance(event, LicenseDeleted):
            metrics.licenses_deleted_total.inc()


class StatsCacheInvalidationHandler(EventHandler):
    """
    Event handler for cache invalidation.

    Every license event changes the status counts, so the cached stats
    snapshot is dropped.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for cache invalidation.

        Args:
            event: Domain event
        """
        from licenses.application.services.license_cache_service import LicenseStatsCacheService

        await LicenseStatsCacheService.invalidate_stats()
        logger.debug("Stats cache invalidated (event: %s)", event.event_type)


_registered = False


def register_event_handlers() -> None:
    """Register all event handlers with the event bus. Safe to call more than once."""
    global _registered
    from core.infrastructure.events import event_bus

    if _registered:
        return

    audit_handler = AuditLogEventHandler()
    metrics_handler = MetricsEventHandler()
    cache_handler = StatsCacheInvalidationHandler()

    for event_type in LICENSE_EVENTS:
        event_bus.subscribe(event_type, audit_handler)
        event_bus.subscribe(event_type, metrics_handler)
        event_bus.subscribe(event_type, cache_handler)

    _registered = True
    logger.info("Event handlers registered")
