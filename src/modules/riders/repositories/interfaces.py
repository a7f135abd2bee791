"""Rider repository interface."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IReferenceRepository

if TYPE_CHECKING:
    from modules.riders.models import Rider


class IRiderRepository(IReferenceRepository["Rider"]):
    """Repository contract for riders referenced by shipments."""
