"""
Validation API view.

Client applications call this endpoint on every launch. The first call
binds the license to the calling device; later calls re-validate it.
"""

import ipaddress
from typing import Optional

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.validate_license import ValidateLicenseCommand
from activations.application.handlers.validate_license_handler import ValidateLicenseHandler
from api.exceptions import error_body
from api.v1.activation.serializers import (
    ValidateLicenseRequestSerializer,
    ValidationDataSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.domain.license_key import mask_license_key
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()

tracer = get_tracer(__name__)


def client_ip(request: Request) -> Optional[str]:
    """
    Return the calling client's address.

    Uses the first ``X-Forwarded-For`` hop when it parses as an IP
    address, otherwise ``REMOTE_ADDR``.
    """
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    candidates = [forwarded.split(",")[0].strip()] if forwarded else []
    candidates.append(request.META.get("REMOTE_ADDR", ""))
    for candidate in candidates:
        try:
            return str(ipaddress.ip_address(candidate))
        except ValueError:
            continue
    return None


class ValidateLicenseView(APIView):
    """View for validating a license on a device."""

    result_flag = "valid"

    @extend_schema(
        operation_id="validate_license",
        summary="Validate License",
        description=(
            "Validate a license key for a device fingerprint. An unused license is "
            "bound to the first device that validates it. Rejections are returned "
            "with HTTP 200 and valid=false."
        ),
        tags=["Activation"],
        request=ValidateLicenseRequestSerializer,
        responses={
            200: ValidationDataSerializer,
            409: {"description": "License state kept changing, retry"},
            500: {"description": "Internal error"},
        },
    )
    def post(self, request: Request) -> Response:
        """Validate a license."""
        return async_to_sync(self._handle_validate_license)(request)

    async def _handle_validate_license(self, request: Request) -> Response:
        """Async handler for validate license."""
        with tracer.start_as_current_span("validate_license") as span:
            span.set_attribute("operation", "validate_license")

            serializer = ValidateLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response(
                    error_body("valid", "INVALID_REQUEST", "Invalid request", errors=serializer.errors),
                    status=status.HTTP_200_OK,
                )

            license_key = serializer.validated_data["key"]
            span.set_attribute("license.key", mask_license_key(license_key))

            handler = ValidateLicenseHandler(license_repository=_license_repo)
            command = ValidateLicenseCommand(
                license_key=license_key,
                fingerprint=serializer.validated_data["fingerprint"],
                ip_address=client_ip(request),
                user_agent=request.META.get("HTTP_USER_AGENT", ""),
            )

            result = await handler.handle(command)

            span.set_attribute("license.valid", result.valid)
            span.set_status(Status(StatusCode.OK))

            if not result.valid:
                span.set_attribute("license.rejection", result.code)
                return Response(error_body("valid", result.code, result.message))

            span.set_attribute("license.first_activation", result.first_activation)
            return Response({"valid": True, "data": ValidationDataSerializer(result).data})
