"""Shipment domain constants.

Status and item-condition choices.  The stored values are the
human-readable labels the mobile and web clients already send.
"""

from django.db import models


class ShipmentStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    IN_TRANSIT = "In Transit", "In Transit"
    DELIVERED = "Delivered", "Delivered"
    CANCELED = "Canceled", "Canceled"


class ItemCondition(models.TextChoices):
    DAMAGED = "Damaged", "Damaged"
    PARTIALLY_DAMAGED = "Partially Damaged", "Partially Damaged"
    NOT_DAMAGED_OR_GOOD = "Not Damaged or Good", "Not Damaged or Good"


# Status updates that send an SMS to both sender and receiver.
NOTIFYING_STATUSES: frozenset[str] = frozenset(
    {ShipmentStatus.IN_TRANSIT, ShipmentStatus.DELIVERED, ShipmentStatus.CANCELED}
)

WAYBILL_MAX_RETRIES = 5
