"""
Activation DTOs for API responses.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class LicenseHolderDTO:
    """DTO for the customer a license was issued to."""

    name: str
    email: str


@dataclass
class ValidationResultDTO:
    """
    DTO for a validation outcome.

    ``code`` and ``message`` are set on rejection; the license fields are
    set on success.
    """

    valid: bool
    code: Optional[str] = None
    message: Optional[str] = None
    key: Optional[str] = None
    fingerprint: Optional[str] = None
    activated_at: Optional[int] = None
    expires_at: Optional[int] = None
    user: Optional[LicenseHolderDTO] = None
    first_activation: bool = False
