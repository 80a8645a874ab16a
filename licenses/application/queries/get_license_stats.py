"""
GetLicenseStatsQuery.
"""
from dataclasses import dataclass


@dataclass
class GetLicenseStatsQuery:
    """Query for license counts by status."""

    use_cache: bool = True
