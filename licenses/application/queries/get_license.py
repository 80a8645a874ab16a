"""
GetLicenseQuery.
"""
from dataclasses import dataclass


@dataclass
class GetLicenseQuery:
    """Query for one license and its activation records."""

    license_key: str
