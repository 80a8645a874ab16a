"""
Time helpers for the license data model.

License and activation timestamps are integer milliseconds since the
Unix epoch.
"""
import time
from typing import Callable

MS_PER_DAY = 86_400_000

Clock = Callable[[], int]


def now_ms() -> int:
    """Return the current time in milliseconds since the epoch."""
    return int(time.time() * 1000)
