"""
Database utilities for the Django repository adapters.
"""

import functools
import logging

from asgiref.sync import sync_to_async
from django.db import InterfaceError, OperationalError

from core.domain.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


def store_operation(func):
    """
    Expose a synchronous ORM routine as an awaitable store operation.

    The routine runs through ``sync_to_async`` and connectivity failures
    are logged and re-raised as ``StoreUnavailableError`` so callers
    never see driver-specific errors.

    Usage:
        class DjangoThingRepository(ThingRepository):
            @store_operation
            def find(self, key):
                ...
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            logger.error(
                "License store unavailable during %s",
                func.__qualname__,
                extra={"operation": func.__qualname__, "error_type": type(exc).__name__},
                exc_info=True,
            )
            raise StoreUnavailableError() from exc

    return sync_to_async(wrapper)
