"""
Admin API key middleware.

Management endpoints (issuing, listing, revoking, resetting, deleting
licenses and reading stats) can be restricted to holders of an admin
API key. Validation stays open: the license key is the client's
credential.
"""

import logging
import secrets
from typing import Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)

PROTECTED_PREFIXES = ("/api/licenses", "/api/stats")


class AdminAPIKeyMiddleware(MiddlewareMixin):
    """
    Middleware for admin API key authentication.

    Disabled while ``LICENSE_ADMIN_API_KEYS`` is empty.
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Validate the admin API key on management endpoints.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        allowed_keys = getattr(settings, "LICENSE_ADMIN_API_KEYS", [])
        if not allowed_keys or not request.path.startswith(PROTECTED_PREFIXES):
            return None

        header = getattr(settings, "LICENSE_ADMIN_HEADER", "X-API-Key")
        presented = request.headers.get(header, "")
        if presented and any(secrets.compare_digest(presented, key) for key in allowed_keys):
            return None

        logger.warning(
            "Rejected management request without a valid API key",
            extra={"path": request.path, "remote_addr": request.META.get("REMOTE_ADDR")},
        )
        return JsonResponse(
            {"success": False, "code": "INVALID_API_KEY", "message": "Invalid or missing API key"},
            status=401,
        )
