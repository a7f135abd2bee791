"""Unit tests for the shipment SMS templates."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.shipments.constants import ShipmentStatus
from modules.shipments.messages import created_message, format_amount, status_messages
from modules.shipments.models import Shipment

pytestmark = pytest.mark.unit


def _shipment(**overrides) -> Shipment:
    defaults = {
        "sender_name": "Ngozi",
        "receiver_name": "Yusuf",
        "waybill_number": "LAG-ABU-IKE-261019ABC123",
        "payment_method": "Cash",
        "amount_paid": Decimal("500"),
    }
    defaults.update(overrides)
    return Shipment(**defaults)


class TestFormatAmount:
    @pytest.mark.parametrize(
        "amount, expected",
        [
            (Decimal("500"), "500"),
            (Decimal("500.00"), "500"),
            (Decimal("500.5"), "500.50"),
            (Decimal("0"), "0"),
            (Decimal("1250.75"), "1250.75"),
        ],
    )
    def test_formats(self, amount, expected):
        assert format_amount(amount) == expected


class TestCreatedMessage:
    def test_exact_text(self):
        assert created_message(_shipment()) == (
            "Hello Ngozi, your shipment with waybill LAG-ABU-IKE-261019ABC123 is "
            "pending confirmation of payment via Cash. Amount: 500."
        )


class TestStatusMessages:
    def test_in_transit(self):
        sender, receiver = status_messages(_shipment(), ShipmentStatus.IN_TRANSIT)
        assert sender == (
            "Hello Ngozi, your shipment with waybill number LAG-ABU-IKE-261019ABC123 "
            "is now in transit to Yusuf. Thank you for choosing First Line Logistics."
        )
        assert receiver == (
            "Hello Yusuf, the shipment from Ngozi with waybill number "
            "LAG-ABU-IKE-261019ABC123 is now in transit. Thank you for choosing "
            "First Line Logistics."
        )

    def test_delivered(self):
        sender, receiver = status_messages(_shipment(), "Delivered")
        assert sender == (
            "Hello Ngozi, your shipment with waybill number LAG-ABU-IKE-261019ABC123 "
            "has been delivered to Yusuf. Thank you for choosing First Line Logistics."
        )
        assert receiver == (
            "Hello Yusuf, the shipment from Ngozi with waybill number "
            "LAG-ABU-IKE-261019ABC123 has been delivered. Thank you for choosing "
            "First Line Logistics."
        )

    def test_canceled(self):
        sender, receiver = status_messages(_shipment(), ShipmentStatus.CANCELED)
        assert sender == (
            "Hello Ngozi, your shipment with waybill number LAG-ABU-IKE-261019ABC123 "
            "has been canceled. We apologize for the inconvenience."
        )
        assert receiver == (
            "Hello Yusuf, the shipment from Ngozi with waybill number "
            "LAG-ABU-IKE-261019ABC123 has been canceled. We apologize for the "
            "inconvenience."
        )

    def test_pending_sends_nothing(self):
        assert status_messages(_shipment(), ShipmentStatus.PENDING) is None
