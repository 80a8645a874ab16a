"""
GenerateLicenseCommand.

Command to issue a new unused license.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class GenerateLicenseCommand:
    """Command to generate a license. Blank fields fall back to defaults."""

    client_name: Optional[str] = None
    client_email: Optional[str] = None
    license_type: Optional[str] = None
    duration_days: Optional[int] = None
    notes: Optional[str] = None
