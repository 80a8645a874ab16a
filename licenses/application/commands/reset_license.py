"""
ResetLicenseCommand.

Both reset entry points (key in the path, key in the body) build this
command.
"""
from dataclasses import dataclass


@dataclass
class ResetLicenseCommand:
    """Command to return a license to unused."""

    license_key: str
