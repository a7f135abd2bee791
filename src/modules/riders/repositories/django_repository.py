"""Django ORM implementation of the Rider repository."""

from __future__ import annotations

from typing import Dict, Iterable, Optional
from uuid import UUID

from django.core.exceptions import ValidationError

from modules.riders.models import Rider
from modules.riders.repositories.interfaces import IRiderRepository


class RiderDjangoRepository(IRiderRepository):
    """Concrete Rider repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Rider]:
        """Return ``None`` for non-existent or malformed IDs."""
        try:
            return Rider.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_many(self, ids: Iterable[UUID]) -> Dict[UUID, Rider]:
        return Rider.objects.in_bulk(set(ids))
