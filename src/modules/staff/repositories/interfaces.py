"""Staff repository interface."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IReferenceRepository

if TYPE_CHECKING:
    from modules.staff.models import Staff


class IStaffRepository(IReferenceRepository["Staff"]):
    """Repository contract for staff members referenced by shipments."""
