"""SMS message templates for shipment notifications."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Dict, Optional, Tuple

from modules.shipments.constants import ShipmentStatus

if TYPE_CHECKING:
    from modules.shipments.models import Shipment

CREATED_TEMPLATE = (
    "Hello {sender_name}, your shipment with waybill {waybill_number} is pending "
    "confirmation of payment via {payment_method}. Amount: {amount_paid}."
)

# status -> (sender template, receiver template)
STATUS_TEMPLATES: Dict[str, Tuple[str, str]] = {
    ShipmentStatus.IN_TRANSIT: (
        "Hello {sender_name}, your shipment with waybill number {waybill_number} "
        "is now in transit to {receiver_name}. Thank you for choosing First Line "
        "Logistics.",
        "Hello {receiver_name}, the shipment from {sender_name} with waybill number "
        "{waybill_number} is now in transit. Thank you for choosing First Line "
        "Logistics.",
    ),
    ShipmentStatus.DELIVERED: (
        "Hello {sender_name}, your shipment with waybill number {waybill_number} "
        "has been delivered to {receiver_name}. Thank you for choosing First Line "
        "Logistics.",
        "Hello {receiver_name}, the shipment from {sender_name} with waybill number "
        "{waybill_number} has been delivered. Thank you for choosing First Line "
        "Logistics.",
    ),
    ShipmentStatus.CANCELED: (
        "Hello {sender_name}, your shipment with waybill number {waybill_number} "
        "has been canceled. We apologize for the inconvenience.",
        "Hello {receiver_name}, the shipment from {sender_name} with waybill number "
        "{waybill_number} has been canceled. We apologize for the inconvenience.",
    ),
}


def format_amount(amount: Decimal) -> str:
    """``500`` for whole amounts, ``500.50`` otherwise."""
    amount = Decimal(amount)
    if amount == amount.to_integral_value():
        return str(amount.quantize(Decimal("1")))
    return str(amount.quantize(Decimal("0.01")))


def created_message(shipment: Shipment) -> str:
    return CREATED_TEMPLATE.format(
        sender_name=shipment.sender_name,
        waybill_number=shipment.waybill_number,
        payment_method=shipment.payment_method,
        amount_paid=format_amount(shipment.amount_paid),
    )


def status_messages(shipment: Shipment, status: str) -> Optional[Tuple[str, str]]:
    """Return ``(sender_message, receiver_message)`` or ``None``.

    ``None`` means *status* does not notify anyone (e.g. back to Pending).
    """
    templates = STATUS_TEMPLATES.get(status)
    if templates is None:
        return None
    context = {
        "sender_name": shipment.sender_name,
        "receiver_name": shipment.receiver_name,
        "waybill_number": shipment.waybill_number,
    }
    sender_template, receiver_template = templates
    return sender_template.format(**context), receiver_template.format(**context)
