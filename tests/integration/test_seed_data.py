"""Integration tests for the ``seed_data`` management command."""

from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import call_command

from modules.riders.models import Rider
from modules.shipments.models import Shipment
from modules.staff.models import Staff

pytestmark = pytest.mark.integration


def _seed() -> str:
    out = StringIO()
    call_command("seed_data", stdout=out)
    return out.getvalue()


class TestSeedData:
    def test_seeds_riders_staff_and_shipments(self, sms_outbox):
        output = _seed()

        assert "Seed completed" in output
        assert Rider.objects.count() == 5
        assert Staff.objects.count() == 4
        assert Shipment.objects.count() == 20
        assert sms_outbox == []

    def test_shipments_get_generated_waybills(self):
        _seed()

        waybills = list(Shipment.objects.values_list("waybill_number", flat=True))
        assert len(set(waybills)) == len(waybills)
        assert all(w.count("-") == 3 for w in waybills)

    def test_is_idempotent(self):
        _seed()
        output = _seed()

        assert "already seeded" in output
        assert Rider.objects.count() == 5
        assert Shipment.objects.count() == 20
