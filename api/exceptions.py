"""
API exception handlers.

This module provides custom exception handling for REST API responses.
Every error body carries the same boolean flag as the view's successful
responses: ``success`` for management endpoints, ``valid`` for
validation.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    ActivationConflictError,
    DomainException,
    LicenseKeyAllocationError,
    LicenseNotFoundError,
    StoreUnavailableError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

DEFAULT_RESULT_FLAG = "success"
INTERNAL_ERROR_MESSAGE = "An internal error occurred"

# Failures of the service itself rather than of the request
INTERNAL_DOMAIN_ERRORS = (StoreUnavailableError, LicenseKeyAllocationError)


def error_body(
    result_flag: str, code: str, message: str, errors: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Build an error envelope.

    Args:
        result_flag: ``success`` or ``valid``
        code: Machine-readable error code
        message: Human-readable message
        errors: Optional field errors

    Returns:
        Response body
    """
    body: Dict[str, Any] = {result_flag: False, "code": code, "message": message}
    if errors is not None:
        body["errors"] = errors
    return body


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)
    result_flag = _get_result_flag(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, context, result_flag, trace_id)
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        detail = response.data.get("detail", exc.default_detail) if isinstance(response.data, dict) else exc.default_detail
        code = exc.default_code.upper().replace("-", "_") if hasattr(exc, "default_code") else "API_ERROR"
        response.data = error_body(result_flag, code, str(detail))
    elif isinstance(exc, Http404):
        response = Response(
            error_body(result_flag, "NOT_FOUND", "Resource not found"),
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        response = _handle_unexpected_exception(exc, context, result_flag, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _get_result_flag(context: Dict[str, Any]) -> str:
    """Return the envelope flag the raising view uses."""
    view = context.get("view")
    return getattr(view, "result_flag", DEFAULT_RESULT_FLAG)


def _endpoint(context: Dict[str, Any]) -> str:
    view = context.get("view")
    return type(view).__name__ if view is not None else "unknown"


def _handle_domain_exception(
    exc: DomainException, context: Dict[str, Any], result_flag: str, trace_id: Optional[str]
) -> Response:
    """Handle domain-specific exceptions."""
    if isinstance(exc, INTERNAL_DOMAIN_ERRORS):
        logger.error(
            "Internal failure: %s - %s",
            exc.code,
            exc.message,
            extra={"trace_id": trace_id, "endpoint": _endpoint(context)},
            exc_info=True,
        )
        errors_total.labels(error_type=exc.code, endpoint=_endpoint(context)).inc()
        return Response(
            error_body(result_flag, "INTERNAL_ERROR", INTERNAL_ERROR_MESSAGE),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    status_code = status.HTTP_400_BAD_REQUEST
    if isinstance(exc, LicenseNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ActivationConflictError):
        status_code = status.HTTP_409_CONFLICT

    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response(error_body(result_flag, exc.code, exc.message), status=status_code)


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], result_flag: str, trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    errors_total.labels(error_type=type(exc).__name__, endpoint=_endpoint(context)).inc()
    return Response(
        error_body(result_flag, "INTERNAL_ERROR", INTERNAL_ERROR_MESSAGE),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
