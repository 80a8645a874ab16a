"""
License management API views.

These endpoints are used by operators to:
- Generate licenses
- List and inspect licenses with their activation history
- Revoke, reset and delete licenses
- Read license counts by status
"""

from django.conf import settings
from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from api.exceptions import error_body
from api.v1.licenses.serializers import (
    GenerateLicenseRequestSerializer,
    GeneratedLicenseSerializer,
    LicenseDetailSerializer,
    LicenseSerializer,
    LicenseStatsSerializer,
    ResetLicenseRequestSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.generate_license import GenerateLicenseCommand
from licenses.application.commands.reset_license import ResetLicenseCommand
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.application.handlers.generate_license_handler import GenerateLicenseHandler
from licenses.application.handlers.license_lifecycle_handlers import (
    DeleteLicenseHandler,
    ResetLicenseHandler,
    RevokeLicenseHandler,
)
from licenses.application.handlers.license_query_handlers import (
    GetLicenseHandler,
    GetLicenseStatsHandler,
    ListLicensesHandler,
)
from licenses.application.queries.get_license import GetLicenseQuery
from licenses.application.queries.get_license_stats import GetLicenseStatsQuery
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.domain.license_key import mask_license_key
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

# Initialize repositories (in production, use DI container)
_activation_repo = DjangoActivationRepository()
_license_repo = DjangoLicenseRepository(activation_repository=_activation_repo)

tracer = get_tracer(__name__)

LICENSE_KEY_PARAMETER = OpenApiParameter(
    name="key",
    type=str,
    location=OpenApiParameter.PATH,
    description="License key (XXXX-XXXX-XXXX-XXXX)",
)


def invalid_request(serializer) -> Response:
    """Malformed bodies are business rejections, reported with HTTP 200."""
    return Response(
        error_body("success", "INVALID_REQUEST", "Invalid request", errors=serializer.errors),
        status=status.HTTP_200_OK,
    )


class GenerateLicenseView(APIView):
    """View for generating licenses."""

    result_flag = "success"

    @extend_schema(
        operation_id="generate_license",
        summary="Generate License",
        description=(
            "Issue a new unused license. Omitted fields fall back to defaults; "
            "durationDays=0 issues a license that never expires. Invalid input is "
            "returned with HTTP 200 and success=false."
        ),
        tags=["License Management"],
        request=GenerateLicenseRequestSerializer,
        responses={
            200: GeneratedLicenseSerializer,
            500: {"description": "Internal error"},
        },
    )
    def post(self, request: Request) -> Response:
        """Generate a license."""
        return async_to_sync(self._handle_generate_license)(request)

    async def _handle_generate_license(self, request: Request) -> Response:
        """Async handler for generate license."""
        with tracer.start_as_current_span("generate_license") as span:
            span.set_attribute("operation", "generate_license")

            serializer = GenerateLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return invalid_request(serializer)

            data = serializer.validated_data
            handler = GenerateLicenseHandler(
                license_repository=_license_repo,
                max_attempts=settings.LICENSE_KEY_MAX_ATTEMPTS,
            )
            command = GenerateLicenseCommand(
                client_name=data.get("clientName"),
                client_email=data.get("clientEmail"),
                license_type=data.get("licenseType"),
                duration_days=data.get("durationDays"),
                notes=data.get("notes"),
            )

            result = await handler.handle(command)

            span.set_attribute("license.type", result.license_type)
            span.set_attribute("license.duration_days", result.duration_days)
            span.set_status(Status(StatusCode.OK))

            return Response({"success": True, "data": GeneratedLicenseSerializer(result).data})


class LicenseListView(APIView):
    """View for listing licenses."""

    result_flag = "success"

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="List every license, newest first.",
        tags=["License Management"],
        responses={200: LicenseSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        """List licenses."""
        return async_to_sync(self._handle_list_licenses)(request)

    async def _handle_list_licenses(self, _request: Request) -> Response:
        """Async handler for list licenses."""
        with tracer.start_as_current_span("list_licenses") as span:
            handler = ListLicensesHandler(license_repository=_license_repo)
            result = await handler.handle(ListLicensesQuery())

            span.set_attribute("licenses.count", len(result))
            span.set_status(Status(StatusCode.OK))
            return Response({"success": True, "data": LicenseSerializer(result, many=True).data})


class LicenseDetailView(APIView):
    """View for reading and deleting one license."""

    result_flag = "success"

    @extend_schema(
        operation_id="get_license",
        summary="Get License",
        description="Return a license together with its activation records, newest first.",
        tags=["License Management"],
        parameters=[LICENSE_KEY_PARAMETER],
        responses={
            200: LicenseDetailSerializer,
            404: {"description": "License not found"},
        },
    )
    def get(self, request: Request, key: str) -> Response:
        """Get a license."""
        return async_to_sync(self._handle_get_license)(request, key)

    async def _handle_get_license(self, _request: Request, key: str) -> Response:
        """Async handler for get license."""
        with tracer.start_as_current_span("get_license") as span:
            span.set_attribute("license.key", mask_license_key(key))

            handler = GetLicenseHandler(
                license_repository=_license_repo,
                activation_repository=_activation_repo,
            )
            result = await handler.handle(GetLicenseQuery(license_key=key))

            span.set_attribute("license.status", result.status)
            span.set_status(Status(StatusCode.OK))
            return Response({"success": True, "data": LicenseDetailSerializer(result).data})

    @extend_schema(
        operation_id="delete_license",
        summary="Delete License",
        description="Delete a license and its activation records.",
        tags=["License Management"],
        parameters=[LICENSE_KEY_PARAMETER],
        responses={
            200: {"description": "License deleted"},
            404: {"description": "License not found"},
        },
    )
    def delete(self, request: Request, key: str) -> Response:
        """Delete a license."""
        return async_to_sync(self._handle_delete_license)(request, key)

    async def _handle_delete_license(self, _request: Request, key: str) -> Response:
        """Async handler for delete license."""
        with tracer.start_as_current_span("delete_license") as span:
            span.set_attribute("license.key", mask_license_key(key))

            handler = DeleteLicenseHandler(license_repository=_license_repo)
            await handler.handle(DeleteLicenseCommand(license_key=key))

            span.set_status(Status(StatusCode.OK))
            return Response({"success": True, "message": "License deleted successfully"})


class RevokeLicenseView(APIView):
    """View for revoking licenses."""

    result_flag = "success"

    @extend_schema(
        operation_id="revoke_license",
        summary="Revoke License",
        description="Revoke a license. Validation fails for it until it is reset.",
        tags=["License Management"],
        parameters=[LICENSE_KEY_PARAMETER],
        request=None,
        responses={
            200: {"description": "License revoked"},
            404: {"description": "License not found"},
        },
    )
    def post(self, request: Request, key: str) -> Response:
        """Revoke a license."""
        return async_to_sync(self._handle_revoke_license)(request, key)

    async def _handle_revoke_license(self, _request: Request, key: str) -> Response:
        """Async handler for revoke license."""
        with tracer.start_as_current_span("revoke_license") as span:
            span.set_attribute("license.key", mask_license_key(key))

            handler = RevokeLicenseHandler(license_repository=_license_repo)
            await handler.handle(RevokeLicenseCommand(license_key=key))

            span.set_status(Status(StatusCode.OK))
            return Response({"success": True, "message": "License revoked successfully"})


async def _reset(license_key: str) -> Response:
    """Shared body of both reset entry points."""
    with tracer.start_as_current_span("reset_license") as span:
        span.set_attribute("license.key", mask_license_key(license_key))

        handler = ResetLicenseHandler(license_repository=_license_repo)
        await handler.handle(ResetLicenseCommand(license_key=license_key))

        span.set_status(Status(StatusCode.OK))
        return Response({"success": True, "message": "License reset successfully"})


class ResetLicenseView(APIView):
    """View for resetting a license named in the path."""

    result_flag = "success"

    @extend_schema(
        operation_id="reset_license",
        summary="Reset License",
        description="Return a license to unused, clearing its device binding.",
        tags=["License Management"],
        parameters=[LICENSE_KEY_PARAMETER],
        request=None,
        responses={
            200: {"description": "License reset"},
            404: {"description": "License not found"},
        },
    )
    def post(self, _request: Request, key: str) -> Response:
        """Reset a license."""
        return async_to_sync(_reset)(key)


class ResetLicenseByBodyView(APIView):
    """View for resetting a license named in the request body."""

    result_flag = "success"

    @extend_schema(
        operation_id="reset_license_by_body",
        summary="Reset License (body)",
        description="Same as the path form; the key is read from licenseKey (or key).",
        tags=["License Management"],
        request=ResetLicenseRequestSerializer,
        responses={
            200: {"description": "License reset, or invalid request (success=false)"},
            404: {"description": "License not found"},
        },
    )
    def post(self, request: Request) -> Response:
        """Reset a license."""
        serializer = ResetLicenseRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request(serializer)
        return async_to_sync(_reset)(serializer.validated_data["license_key"])


class LicenseStatsView(APIView):
    """View for license counts by status."""

    result_flag = "success"

    @extend_schema(
        operation_id="license_stats",
        summary="License Stats",
        description="Count licenses by status.",
        tags=["License Management"],
        responses={200: LicenseStatsSerializer},
    )
    def get(self, request: Request) -> Response:
        """Get license stats."""
        return async_to_sync(self._handle_stats)(request)

    async def _handle_stats(self, _request: Request) -> Response:
        """Async handler for license stats."""
        with tracer.start_as_current_span("license_stats") as span:
            handler = GetLicenseStatsHandler(license_repository=_license_repo)
            result = await handler.handle(GetLicenseStatsQuery())

            span.set_attribute("licenses.total", result.total)
            span.set_status(Status(StatusCode.OK))
            return Response({"success": True, "data": LicenseStatsSerializer(result).data})
