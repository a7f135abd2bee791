"""Shipment model.

- ``waybill_number`` is the human-readable tracking code; it is assigned
  once at creation (see ``waybill.py``) and never edited afterwards.
- ``status`` and ``item_condition`` are restricted to their choices; the
  service layer rejects anything else before it reaches the database.
- ``rider`` / ``created_by`` use PROTECT so a shipment never points at a
  deleted courier or staff member.
- Deletion is a hard delete.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.shipments.constants import ItemCondition, ShipmentStatus

_NON_NEGATIVE = [MinValueValidator(Decimal("0.00"))]


class Shipment(BaseModel):
    """Shipment aggregate root."""

    # Parties
    sender_name = models.CharField(max_length=255)
    sender_phone_number = models.CharField(max_length=20)
    receiver_name = models.CharField(max_length=255)
    receiver_address = models.TextField()
    receiver_phone = models.CharField(max_length=20)

    # Package
    name = models.CharField(max_length=255)
    description = models.TextField()
    delivery_type = models.CharField(max_length=50)
    item_condition = models.CharField(
        max_length=30,
        choices=ItemCondition.choices,
        default=ItemCondition.NOT_DAMAGED_OR_GOOD,
    )

    # Routing
    origin_state = models.CharField(max_length=100)
    destination_state = models.CharField(max_length=100)
    branch_name = models.CharField(max_length=120)
    waybill_number = models.CharField(max_length=40, unique=True, editable=False)
    status = models.CharField(
        max_length=20,
        choices=ShipmentStatus.choices,
        default=ShipmentStatus.PENDING,
    )

    # Payment
    total_price = models.DecimalField(
        max_digits=12, decimal_places=2, validators=_NON_NEGATIVE
    )
    amount_paid = models.DecimalField(
        max_digits=12, decimal_places=2, validators=_NON_NEGATIVE
    )
    payment_method = models.CharField(max_length=50)
    insurance = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=_NON_NEGATIVE,
    )

    # References
    rider = models.ForeignKey(
        "riders.Rider",
        on_delete=models.PROTECT,
        related_name="shipments",
    )
    created_by = models.ForeignKey(
        "staff.Staff",
        on_delete=models.PROTECT,
        related_name="shipments_created",
    )

    class Meta:
        db_table = "shipments"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="shipments_status_idx"),
            models.Index(fields=["-created_at"], name="shipments_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.waybill_number} ({self.status})"
