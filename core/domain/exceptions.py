"""
Domain exceptions.

Domain exceptions represent error conditions that abort an operation.
Expected validation outcomes (device mismatch, expiry, revocation) are
not exceptions; they are returned as rejected validation decisions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(LicenseException):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class DuplicateLicenseKeyError(LicenseException):
    """Raised by the store when a generated key already exists."""

    def __init__(self, message: str = "License key already exists"):
        super().__init__(message, code="DUPLICATE_LICENSE_KEY")


class LicenseKeyAllocationError(LicenseException):
    """Raised when no unique key could be generated within the retry budget."""

    def __init__(self, message: str = "Could not allocate a unique license key"):
        super().__init__(message, code="KEY_ALLOCATION_FAILED")


class ActivationConflictError(LicenseException):
    """Raised when a binding attempt keeps losing to concurrent state changes."""

    def __init__(self, message: str = "License state changed during activation, retry"):
        super().__init__(message, code="ACTIVATION_CONFLICT")


class StoreUnavailableError(DomainException):
    """Raised when the license store cannot be reached."""

    def __init__(self, message: str = "License store unavailable"):
        super().__init__(message, code="STORE_UNAVAILABLE")
