"""
DeleteLicenseCommand.
"""
from dataclasses import dataclass


@dataclass
class DeleteLicenseCommand:
    """Command to delete a license and its activation history."""

    license_key: str
