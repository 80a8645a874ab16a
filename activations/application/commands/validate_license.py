"""
ValidateLicenseCommand.

Command presented by a client application on launch.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ValidateLicenseCommand:
    """Command to validate a license for a device, binding it on first use."""

    license_key: str
    fingerprint: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
