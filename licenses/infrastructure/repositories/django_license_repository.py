"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from typing import List, Optional

from django.db import IntegrityError, transaction
from django.db.models import Count, Q

from activations.domain.activation import Activation
from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from core.domain.exceptions import DuplicateLicenseKeyError
from core.domain.value_objects import LicenseStatus
from core.infrastructure.database import store_operation
from licenses.domain.license import License, LicensePatch, LicenseStats
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface

    Status transitions are single ``UPDATE`` statements filtered by key
    (and, where a guard is given, by the expected status) so concurrent
    requests never overwrite each other through a stale read.
    """

    def __init__(self, activation_repository: Optional[DjangoActivationRepository] = None):
        """
        Initialize repository.

        Args:
            activation_repository: Adapter used to write activation records
                inside the binding transaction
        """
        self.activation_repository = activation_repository or DjangoActivationRepository()

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            key=model.key,
            client_name=model.client_name,
            client_email=model.client_email,
            license_type=model.license_type,
            duration_days=model.duration_days,
            notes=model.notes,
            status=LicenseStatus(model.status),
            created_at=model.created_at,
            activated_at=model.activated_at,
            expires_at=model.expires_at,
            bound_fingerprint=model.bound_fingerprint,
        )

    def _to_model(self, license: License) -> LicenseModel:
        """
        Convert domain entity to a new, unsaved Django model.

        Args:
            license: License domain entity

        Returns:
            Django License model
        """
        return LicenseModel(
            key=license.key,
            client_name=license.client_name,
            client_email=license.client_email,
            license_type=license.license_type,
            duration_days=license.duration_days,
            notes=license.notes,
            status=license.status.value,
            created_at=license.created_at,
            activated_at=license.activated_at,
            expires_at=license.expires_at,
            bound_fingerprint=license.bound_fingerprint,
        )

    @store_operation
    def create(self, license: License) -> License:
        """
        Insert a new license.

        Args:
            license: License entity to insert

        Returns:
            Stored license entity

        Raises:
            DuplicateLicenseKeyError: If the key already exists
        """
        model = self._to_model(license)
        try:
            with transaction.atomic():
                model.save(force_insert=True)
        except IntegrityError as exc:
            raise DuplicateLicenseKeyError() from exc
        return self._to_domain(model)

    @store_operation
    def find_by_key(self, key: str) -> Optional[License]:
        """
        Find a license by key.

        Args:
            key: License key

        Returns:
            License entity or None if not found
        """
        try:
            return self._to_domain(LicenseModel.objects.get(key=key))
        except LicenseModel.DoesNotExist:
            return None

    @store_operation
    def list_all(self) -> List[License]:
        """
        List every license, newest first.

        Returns:
            List of License entities
        """
        models = LicenseModel.objects.order_by("-created_at", "-key")
        return [self._to_domain(model) for model in models]

    @store_operation
    def update_status(
        self,
        key: str,
        patch: LicensePatch,
        only_if_status: Optional[LicenseStatus] = None,
        only_if_activated_at: Optional[int] = None,
    ) -> int:
        """
        Apply a partial update to one license.

        Args:
            key: License key
            patch: Fields to write
            only_if_status: Only update while the stored status equals this
            only_if_activated_at: Only update while the stored activation
                time equals this, so a binding made after a reset is left alone

        Returns:
            Number of rows updated
        """
        queryset = LicenseModel.objects.filter(key=key)
        if only_if_status is not None:
            queryset = queryset.filter(status=only_if_status.value)
        if only_if_activated_at is not None:
            queryset = queryset.filter(activated_at=only_if_activated_at)
        return queryset.update(**patch.changes())

    @store_operation
    def activate(self, key: str, patch: LicensePatch, activation: Activation) -> bool:
        """
        Bind an unused license and record the activation atomically.

        Args:
            key: License key
            patch: Activation patch
            activation: Activation record to append

        Returns:
            True if this call bound the license
        """
        with transaction.atomic():
            updated = LicenseModel.objects.filter(
                key=key, status=LicenseStatus.UNUSED.value
            ).update(**patch.changes())
            if updated != 1:
                return False
            self.activation_repository.insert(activation)
        return True

    @store_operation
    def delete(self, key: str) -> int:
        """
        Delete a license and its activation records.

        Args:
            key: License key

        Returns:
            Number of licenses deleted
        """
        _, deleted_by_model = LicenseModel.objects.filter(key=key).delete()
        return deleted_by_model.get(LicenseModel._meta.label, 0)

    @store_operation
    def stats(self) -> LicenseStats:
        """
        Count licenses by status in one query.

        Returns:
            LicenseStats
        """
        counts = LicenseModel.objects.aggregate(
            **{
                status.value: Count("id", filter=Q(status=status.value))
                for status in LicenseStatus
            }
        )
        return LicenseStats(**{name: count or 0 for name, count in counts.items()})

    @store_operation
    def find_active_past_expiry(self, current_time: int) -> List[License]:
        """
        Find active licenses whose non-zero expiry is before ``current_time``.

        Args:
            current_time: Time in ms

        Returns:
            List of License entities
        """
        models = LicenseModel.objects.filter(
            status=LicenseStatus.ACTIVE.value,
            expires_at__gt=0,
            expires_at__lt=current_time,
        ).order_by("expires_at")
        return [self._to_domain(model) for model in models]
