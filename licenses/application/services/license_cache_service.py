"""
License cache service.

Caches the status-count snapshot served by the stats endpoint.
"""
import logging
from typing import Optional

from django.conf import settings

from core.infrastructure.cache_adapters import cache_adapter
from licenses.application.dto.license_dto import LicenseStatsDTO

logger = logging.getLogger(__name__)

STATS_CACHE_KEY = "license:stats"
DEFAULT_STATS_TTL = 30  # seconds


class LicenseStatsCacheService:
    """Service for caching license statistics."""

    @staticmethod
    def _ttl() -> int:
        return getattr(settings, "LICENSE_STATS_CACHE_TTL", DEFAULT_STATS_TTL)

    @staticmethod
    async def get_stats() -> Optional[LicenseStatsDTO]:
        """
        Get cached license stats.

        Returns:
            Cached LicenseStatsDTO or None
        """
        cached = await cache_adapter.get(STATS_CACHE_KEY)
        if not cached:
            return None
        try:
            return LicenseStatsDTO(**cached)
        except TypeError:
            logger.warning("Discarding malformed stats cache entry")
            return None

    @staticmethod
    async def set_stats(stats: LicenseStatsDTO) -> None:
        """
        Cache license stats.

        Args:
            stats: LicenseStatsDTO to cache
        """
        await cache_adapter.set(
            STATS_CACHE_KEY,
            {
                "unused": stats.unused,
                "active": stats.active,
                "expired": stats.expired,
                "revoked": stats.revoked,
                "total": stats.total,
            },
            timeout=LicenseStatsCacheService._ttl(),
        )

    @staticmethod
    async def invalidate_stats() -> None:
        """Drop the cached stats snapshot."""
        await cache_adapter.delete(STATS_CACHE_KEY)
