"""Integration tests for the shipment delete endpoint."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.shipments.models import Shipment

pytestmark = pytest.mark.integration

URL = "/api/v1/shipments/"


class TestDeleteShipment:
    def test_deletes_permanently(self, auth_client, make_shipment, sms_outbox):
        shipment = make_shipment()

        response = auth_client.delete(f"{URL}{shipment.id}/")

        assert response.status_code == 200
        assert response.json() == {"detail": "Shipment deleted successfully"}
        assert not Shipment.objects.filter(id=shipment.id).exists()
        assert sms_outbox == []

    def test_deleted_shipment_is_gone(self, auth_client, make_shipment):
        shipment = make_shipment()
        auth_client.delete(f"{URL}{shipment.id}/")

        assert auth_client.get(f"{URL}{shipment.id}/").status_code == 404
        assert auth_client.get(f"{URL}waybill/{shipment.waybill_number}/").status_code == 404

    def test_unknown_id_returns_404(self, auth_client):
        missing = uuid4()

        response = auth_client.delete(f"{URL}{missing}/")

        assert response.status_code == 404
        assert response.json() == {"detail": f"Shipment with ID {missing} not found"}

    def test_malformed_id_returns_404(self, auth_client):
        response = auth_client.delete(f"{URL}not-a-uuid/")

        assert response.status_code == 404

    def test_only_target_is_deleted(self, auth_client, make_shipment):
        keep = make_shipment()
        drop = make_shipment()

        auth_client.delete(f"{URL}{drop.id}/")

        assert list(Shipment.objects.values_list("id", flat=True)) == [keep.id]

    def test_requires_authentication(self, api_client, make_shipment):
        shipment = make_shipment()

        assert api_client.delete(f"{URL}{shipment.id}/").status_code == 401
        assert Shipment.objects.filter(id=shipment.id).exists()
