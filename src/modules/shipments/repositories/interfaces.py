"""Shipment repository interface.

Extends ``IRepository[Shipment]`` with the look-ups and atomic partial
update the Shipment Lifecycle Manager needs.  The Service Layer depends
exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.shipments.models import Shipment


class IShipmentRepository(IRepository["Shipment"]):
    """Repository contract for the Shipment aggregate root."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Shipment:
        """Insert a shipment built from model-field ``data`` atomically."""

    @abstractmethod
    def update(self, id: str, fields: Dict[str, Any]) -> Optional[Shipment]:
        """Apply ``fields`` to one shipment atomically.

        Returns the updated shipment, or ``None`` when no shipment has
        that id (including malformed ids).
        """

    @abstractmethod
    def get_by_waybill(self, waybill_number: str) -> Optional[Shipment]:
        """Retrieve a shipment by its exact waybill number."""

    @abstractmethod
    def waybill_exists(self, waybill_number: str) -> bool:
        """Report whether a waybill number is already allocated."""

    @abstractmethod
    def list(self) -> List[Shipment]:
        """All shipments, most recently created first."""
