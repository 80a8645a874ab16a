"""
License key generation and formatting.

Keys are the customer's only credential, so they are drawn from a
cryptographically secure source.
"""

import re
import secrets
import string

KEY_ALPHABET = string.ascii_uppercase + string.digits
KEY_GROUPS = 4
KEY_GROUP_LENGTH = 4
KEY_LENGTH = KEY_GROUPS * KEY_GROUP_LENGTH + (KEY_GROUPS - 1)

LICENSE_KEY_PATTERN = re.compile(r"^[A-Z0-9]{4}(?:-[A-Z0-9]{4}){3}$")


def generate_license_key() -> str:
    """
    Generate a license key in format: XXXX-XXXX-XXXX-XXXX.

    Returns:
        Generated license key string
    """
    parts = [
        "".join(secrets.choice(KEY_ALPHABET) for _ in range(KEY_GROUP_LENGTH))
        for _ in range(KEY_GROUPS)
    ]
    return "-".join(parts)


def is_well_formed(key: str) -> bool:
    """Check whether a string has the license key shape."""
    return bool(key) and LICENSE_KEY_PATTERN.match(key) is not None


def mask_license_key(key: str) -> str:
    """
    Mask a license key for logs and traces.

    Args:
        key: License key (may be malformed or empty)

    Returns:
        First group followed by a mask, e.g. ``ABCD-****``
    """
    if not key:
        return ""
    return f"{key[:KEY_GROUP_LENGTH]}-****"
