"""
Core views for health checks, readiness and metrics.
"""

import logging

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import HttpResponse, JsonResponse
from django.views import View
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from core.domain.clock import now_ms

logger = logging.getLogger(__name__)


def probe_database() -> None:
    """Run a trivial query; raises ``DatabaseError`` if the store is unreachable."""
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1")


def probe_cache() -> bool:
    """Round-trip a value through the cache."""
    cache.set("health_check", "ok", 10)
    return cache.get("health_check") == "ok"


class HealthView(View):
    """License store health check endpoint."""

    def get(self, _request):
        """Check database connectivity."""
        try:
            probe_database()
        except DatabaseError as e:
            logger.error("Health check failed: database unreachable", exc_info=True)
            return JsonResponse(
                {
                    "status": "unhealthy",
                    "database": "disconnected",
                    "error": type(e).__name__,
                    "timestamp": now_ms(),
                },
                status=503,
            )
        return JsonResponse({"status": "healthy", "database": "connected", "timestamp": now_ms()})


class HealthCacheView(View):
    """Cache health check endpoint."""

    def get(self, _request):
        """Check cache connectivity."""
        try:
            healthy = probe_cache()
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Health check failed: cache unreachable", exc_info=True)
            return JsonResponse(
                {"status": "unhealthy", "cache": "disconnected", "error": type(e).__name__},
                status=503,
            )
        if healthy:
            return JsonResponse({"status": "healthy", "cache": "connected"})
        return JsonResponse({"status": "unhealthy", "cache": "disconnected"}, status=503)


class ReadyView(View):
    """Readiness check endpoint."""

    def get(self, _request):
        """Check if service is ready to accept traffic."""
        checks = {
            "database": self._check_database(),
            "cache": self._check_cache(),
        }

        all_healthy = all(checks.values())
        return JsonResponse(
            {
                "status": "ready" if all_healthy else "not_ready",
                "checks": checks,
            },
            status=200 if all_healthy else 503,
        )

    def _check_database(self) -> bool:
        try:
            probe_database()
        except DatabaseError:
            logger.warning("Readiness: database unreachable", exc_info=True)
            return False
        return True

    def _check_cache(self) -> bool:
        try:
            return probe_cache()
        except Exception:  # pylint: disable=broad-exception-caught
            logger.warning("Readiness: cache unreachable", exc_info=True)
            return False


class MetricsView(View):
    """Prometheus exposition endpoint."""

    def get(self, _request):
        return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)
