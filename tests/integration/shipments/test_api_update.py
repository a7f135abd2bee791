"""Integration tests for the shipment update endpoint (PUT/PATCH).

Covers:
- Status changes and the sender/receiver SMS pair.
- Enum validation leaves the stored record untouched.
- Partial updates, ``insurance=0``, reassignment of rider/staff.
- Idempotence of identical patches.
- Not found 404 (including malformed ids).
"""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.riders.models import Rider
from modules.shipments.constants import ItemCondition, ShipmentStatus
from modules.staff.models import Staff

pytestmark = pytest.mark.integration

URL = "/api/v1/shipments/"


def _detail_url(shipment) -> str:
    return f"{URL}{shipment.id}/"


class TestStatusUpdate:
    def test_delivered_sends_two_sms(self, auth_client, make_shipment, sms_outbox):
        shipment = make_shipment()

        response = auth_client.patch(
            _detail_url(shipment), {"status": "Delivered"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["status"] == ShipmentStatus.DELIVERED
        assert [m["to"] for m in sms_outbox] == [
            shipment.sender_phone_number,
            shipment.receiver_phone,
        ]
        assert all("delivered" in m["message"] for m in sms_outbox)

    def test_in_transit_via_put(self, auth_client, make_shipment, sms_outbox):
        shipment = make_shipment()

        response = auth_client.put(
            _detail_url(shipment), {"status": "In Transit"}, format="json"
        )

        assert response.status_code == 200
        shipment.refresh_from_db()
        assert shipment.status == ShipmentStatus.IN_TRANSIT
        assert len(sms_outbox) == 2
        assert all("in transit" in m["message"] for m in sms_outbox)

    def test_canceled_sends_two_sms(self, auth_client, make_shipment, sms_outbox):
        shipment = make_shipment()

        auth_client.patch(_detail_url(shipment), {"status": "Canceled"}, format="json")

        assert len(sms_outbox) == 2
        assert all("canceled" in m["message"] for m in sms_outbox)

    def test_back_to_pending_sends_nothing(self, auth_client, make_shipment, sms_outbox):
        shipment = make_shipment(status=ShipmentStatus.IN_TRANSIT)

        response = auth_client.patch(
            _detail_url(shipment), {"status": "Pending"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["status"] == ShipmentStatus.PENDING
        assert sms_outbox == []

    def test_invalid_status_leaves_record_unchanged(
        self, auth_client, make_shipment, sms_outbox
    ):
        shipment = make_shipment()

        response = auth_client.patch(
            _detail_url(shipment), {"status": "Lost", "insurance": "99"}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid status"
        shipment.refresh_from_db()
        assert shipment.status == ShipmentStatus.PENDING
        assert shipment.insurance == Decimal("0.00")
        assert sms_outbox == []

    def test_invalid_item_condition_leaves_record_unchanged(self, auth_client, make_shipment):
        shipment = make_shipment(item_condition=ItemCondition.DAMAGED)

        response = auth_client.patch(
            _detail_url(shipment), {"itemCondition": "Soaked"}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid item condition"
        shipment.refresh_from_db()
        assert shipment.item_condition == ItemCondition.DAMAGED


class TestPartialUpdate:
    def test_insurance_only(self, auth_client, make_shipment, rider, staff_member, sms_outbox):
        shipment = make_shipment(
            status=ShipmentStatus.IN_TRANSIT,
            item_condition=ItemCondition.PARTIALLY_DAMAGED,
        )

        response = auth_client.patch(
            _detail_url(shipment), {"insurance": "150.00"}, format="json"
        )

        assert response.status_code == 200
        shipment.refresh_from_db()
        assert shipment.insurance == Decimal("150.00")
        assert shipment.status == ShipmentStatus.IN_TRANSIT
        assert shipment.item_condition == ItemCondition.PARTIALLY_DAMAGED
        assert shipment.rider_id == rider.id
        assert shipment.created_by_id == staff_member.id
        assert sms_outbox == []

    def test_zero_insurance_is_applied(self, auth_client, make_shipment):
        shipment = make_shipment(insurance=Decimal("80.00"))

        auth_client.patch(_detail_url(shipment), {"insurance": 0}, format="json")

        shipment.refresh_from_db()
        assert shipment.insurance == Decimal("0.00")

    def test_negative_insurance_rejected(self, auth_client, make_shipment):
        shipment = make_shipment(insurance=Decimal("80.00"))

        response = auth_client.patch(
            _detail_url(shipment), {"insurance": -10}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid insurance amount"
        shipment.refresh_from_db()
        assert shipment.insurance == Decimal("80.00")

    def test_reassign_rider_and_staff(self, auth_client, make_shipment, sms_outbox):
        shipment = make_shipment()
        new_rider = Rider.objects.create(name="Tunde Bakare", phone_number="+2348031110003")
        new_staff = Staff.objects.create(name="Fatima Yusuf", email="fatima@firstline.example")

        response = auth_client.patch(
            _detail_url(shipment),
            {"riderId": str(new_rider.id), "staffId": str(new_staff.id)},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["rider"] == str(new_rider.id)
        assert response.json()["createdBy"] == str(new_staff.id)
        shipment.refresh_from_db()
        assert shipment.rider_id == new_rider.id
        assert shipment.created_by_id == new_staff.id
        assert sms_outbox == []

    def test_unknown_staff_rejected(self, auth_client, make_shipment, staff_member):
        shipment = make_shipment()

        response = auth_client.patch(
            _detail_url(shipment), {"staffId": str(uuid4())}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid staff ID"
        shipment.refresh_from_db()
        assert shipment.created_by_id == staff_member.id

    def test_identical_patch_is_idempotent(self, auth_client, make_shipment):
        shipment = make_shipment()
        patch = {"status": "In Transit", "insurance": "40", "itemCondition": "Damaged"}

        first = auth_client.patch(_detail_url(shipment), patch, format="json").json()
        second = auth_client.patch(_detail_url(shipment), patch, format="json").json()

        for key in ("status", "insurance", "itemCondition", "rider", "createdBy"):
            assert first[key] == second[key]
        shipment.refresh_from_db()
        assert shipment.status == ShipmentStatus.IN_TRANSIT
        assert shipment.insurance == Decimal("40.00")
        assert shipment.item_condition == ItemCondition.DAMAGED


class TestUpdateNotFound:
    def test_unknown_id_returns_404(self, auth_client, sms_outbox):
        missing = uuid4()

        response = auth_client.patch(
            f"{URL}{missing}/", {"status": "Delivered"}, format="json"
        )

        assert response.status_code == 404
        assert response.json() == {"detail": f"Shipment with ID {missing} not found"}
        assert sms_outbox == []

    def test_malformed_id_returns_404(self, auth_client):
        response = auth_client.patch(
            f"{URL}not-a-uuid/", {"status": "Delivered"}, format="json"
        )

        assert response.status_code == 404
        assert response.json() == {"detail": "Shipment with ID not-a-uuid not found"}

    @pytest.mark.parametrize("body", ['"Delivered"', '["Delivered"]'])
    def test_non_object_body_returns_400(self, auth_client, make_shipment, body, sms_outbox):
        shipment = make_shipment()

        response = auth_client.patch(
            _detail_url(shipment), body, content_type="application/json"
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid request body"
        shipment.refresh_from_db()
        assert shipment.status == ShipmentStatus.PENDING
        assert sms_outbox == []
