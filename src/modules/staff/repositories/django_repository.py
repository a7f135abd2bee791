"""Django ORM implementation of the Staff repository."""

from __future__ import annotations

from typing import Dict, Iterable, Optional
from uuid import UUID

from django.core.exceptions import ValidationError

from modules.staff.models import Staff
from modules.staff.repositories.interfaces import IStaffRepository


class StaffDjangoRepository(IStaffRepository):
    """Concrete Staff repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Staff]:
        try:
            return Staff.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_many(self, ids: Iterable[UUID]) -> Dict[UUID, Staff]:
        return Staff.objects.in_bulk(set(ids))
