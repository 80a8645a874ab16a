"""
License query handlers.
"""
from typing import List

from activations.ports.activation_repository import ActivationRepository
from core.domain.exceptions import LicenseNotFoundError
from licenses.application.dto.license_dto import (
    ActivationRecordDTO,
    LicenseDetailDTO,
    LicenseDTO,
    LicenseStatsDTO,
)
from licenses.application.queries.get_license import GetLicenseQuery
from licenses.application.queries.get_license_stats import GetLicenseStatsQuery
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.application.services.license_cache_service import LicenseStatsCacheService
from licenses.ports.license_repository import LicenseRepository


class GetLicenseHandler:
    """Handler for GetLicenseQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        activation_repository: ActivationRepository,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.activation_repository = activation_repository

    async def handle(self, query: GetLicenseQuery) -> LicenseDetailDTO:
        """
        Handle get license query.

        Args:
            query: GetLicenseQuery

        Returns:
            LicenseDetailDTO with the activation history, newest first

        Raises:
            LicenseNotFoundError: If license not found
        """
        license = await self.license_repository.find_by_key(query.license_key)
        if license is None:
            raise LicenseNotFoundError()

        activations = await self.activation_repository.find_by_license_key(license.key)
        summary = LicenseDTO.from_entity(license)
        return LicenseDetailDTO(
            **vars(summary),
            activations=[ActivationRecordDTO.from_entity(a) for a in activations],
        )


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, query: ListLicensesQuery) -> List[LicenseDTO]:
        """
        Handle list licenses query.

        Returns:
            List of LicenseDTO, newest first
        """
        licenses = await self.license_repository.list_all()
        return [LicenseDTO.from_entity(license) for license in licenses]


class GetLicenseStatsHandler:
    """
    Handler for GetLicenseStatsQuery.

    Serves a cached snapshot when one exists; license events drop it.
    """

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, query: GetLicenseStatsQuery) -> LicenseStatsDTO:
        """
        Handle stats query.

        Args:
            query: GetLicenseStatsQuery

        Returns:
            LicenseStatsDTO
        """
        if query.use_cache:
            cached = await LicenseStatsCacheService.get_stats()
            if cached is not None:
                return cached

        stats = await self.license_repository.stats()
        result = LicenseStatsDTO(**stats.to_dict())

        if query.use_cache:
            await LicenseStatsCacheService.set_stats(result)
        return result
