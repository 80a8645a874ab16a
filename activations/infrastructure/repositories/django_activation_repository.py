"""
Django implementation of ActivationRepository port.
"""
from typing import List

from django.db import transaction

from activations.domain.activation import Activation
from activations.infrastructure.models import Activation as ActivationModel
from activations.ports.activation_repository import ActivationRepository
from core.infrastructure.database import store_operation


class DjangoActivationRepository(ActivationRepository):
    """Django ORM implementation of ActivationRepository."""

    def _to_domain(self, model: ActivationModel) -> Activation:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Activation model

        Returns:
            Activation domain entity
        """
        return Activation(
            id=model.id,
            license_key=model.license_id,
            fingerprint_hash=model.fingerprint_hash,
            activated_at=model.activated_at,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
        )

    def insert(self, activation: Activation) -> Activation:
        """
        Insert an activation row on the current connection.

        Synchronous so the license store can call it inside the binding
        transaction.

        Args:
            activation: Activation entity

        Returns:
            The inserted activation entity
        """
        ActivationModel.objects.create(
            id=activation.id,
            license_id=activation.license_key,
            fingerprint_hash=activation.fingerprint_hash,
            activated_at=activation.activated_at,
            ip_address=activation.ip_address,
            user_agent=activation.user_agent,
        )
        return activation

    @store_operation
    def append(self, activation: Activation) -> Activation:
        """
        Append an activation record in its own transaction.

        Args:
            activation: Activation entity

        Returns:
            Stored activation entity
        """
        with transaction.atomic():
            return self.insert(activation)

    @store_operation
    def find_by_license_key(self, license_key: str) -> List[Activation]:
        """
        Find all activation records of a license, newest first.

        Args:
            license_key: License key

        Returns:
            List of Activation entities
        """
        models = ActivationModel.objects.filter(license_id=license_key).order_by("-activated_at")
        return [self._to_domain(model) for model in models]
