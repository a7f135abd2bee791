"""Django ORM implementation of the Shipment repository.

Satisfies ``IShipmentRepository`` using Django's QuerySet API.  Writes
run inside ``transaction.atomic()``; partial updates lock the row with
``select_for_update()`` so overlapping updates serialize.

Reads do **not** ``select_related`` rider/staff: the Service Layer
resolves those references explicitly through their own repositories.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.shipments.models import Shipment
from modules.shipments.repositories.interfaces import IShipmentRepository

logger = structlog.get_logger(__name__)


class ShipmentDjangoRepository(IShipmentRepository):
    """Concrete Shipment repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create / Update
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Shipment:
        shipment = Shipment(**data)
        shipment.save()
        logger.info(
            "shipment.inserted",
            shipment_id=str(shipment.id),
            waybill_number=shipment.waybill_number,
        )
        return shipment

    @transaction.atomic
    def update(self, id: str, fields: Dict[str, Any]) -> Optional[Shipment]:
        try:
            shipment = Shipment.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None
        if not shipment:
            return None

        for field, value in fields.items():
            setattr(shipment, field, value)

        if fields:
            shipment.save(update_fields=list(fields))
        logger.info(
            "shipment.row_updated",
            shipment_id=str(id),
            fields=sorted(fields),
        )
        return shipment

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Shipment]:
        """Return ``None`` for non-existent or malformed IDs."""
        try:
            return Shipment.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_waybill(self, waybill_number: str) -> Optional[Shipment]:
        return Shipment.objects.filter(waybill_number=waybill_number).first()

    def waybill_exists(self, waybill_number: str) -> bool:
        return Shipment.objects.filter(waybill_number=waybill_number).exists()

    def list(self) -> List[Shipment]:
        return list(Shipment.objects.order_by("-created_at", "-id"))

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Hard-delete a shipment.  Returns ``False`` if it did not exist."""
        shipment = self.get_by_id(id)
        if not shipment:
            return False
        shipment.delete()
        logger.info("shipment.row_deleted", shipment_id=str(id))
        return True
