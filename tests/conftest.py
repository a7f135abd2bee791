from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from modules.notifications import backends
from modules.riders.models import Rider
from modules.shipments.models import Shipment
from modules.staff.models import Staff, StaffRole

SENDER_PHONE = "+2348030000001"
RECEIVER_PHONE = "+2348120000002"


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _isolate_side_effects():
    """Fresh throttle counters and an empty SMS outbox for every test."""
    cache.clear()
    backends.outbox.clear()
    yield
    backends.outbox.clear()


@pytest.fixture()
def sms_outbox():
    return backends.outbox


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def auth_client():
    """APIClient with a force-authenticated Django user."""
    client = APIClient()
    user = get_user_model().objects.create_user(
        username="dispatcher", password="testpass123"
    )
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def rider():
    return Rider.objects.create(
        name="Musa Abubakar",
        phone_number="+2348031110001",
        branch_name="Ikeja",
    )


@pytest.fixture()
def staff_member():
    return Staff.objects.create(
        name="Adaeze Obi",
        email="adaeze@firstline.example",
        branch_name="Ikeja",
        role=StaffRole.MANAGER,
    )


@pytest.fixture()
def shipment_payload(rider, staff_member):
    """A complete camelCase creation payload."""
    return {
        "senderName": "Ngozi Eze",
        "senderPhoneNumber": SENDER_PHONE,
        "receiverName": "Yusuf Bello",
        "receiverAddress": "12 Ahmadu Bello Way, Abuja",
        "receiverPhone": RECEIVER_PHONE,
        "description": "Two boxes of books",
        "deliveryType": "Express",
        "originState": "Lagos",
        "destinationState": "Abuja",
        "name": "Books",
        "branchName": "Ikeja",
        "totalPrice": "750.00",
        "amountPaid": "500",
        "paymentMethod": "Cash",
        "riderId": str(rider.id),
        "staffId": str(staff_member.id),
    }


@pytest.fixture()
def make_shipment(rider, staff_member):
    """Insert a shipment directly, bypassing the service."""
    counter = {"n": 0}

    def _make(**overrides) -> Shipment:
        counter["n"] += 1
        defaults = {
            "sender_name": "Ngozi Eze",
            "sender_phone_number": SENDER_PHONE,
            "receiver_name": "Yusuf Bello",
            "receiver_address": "12 Ahmadu Bello Way, Abuja",
            "receiver_phone": RECEIVER_PHONE,
            "description": "Two boxes of books",
            "delivery_type": "Express",
            "origin_state": "Lagos",
            "destination_state": "Abuja",
            "name": "Books",
            "branch_name": "Ikeja",
            "waybill_number": f"LAG-ABU-IKE-261019{counter['n']:06X}",
            "total_price": Decimal("750.00"),
            "amount_paid": Decimal("500.00"),
            "payment_method": "Cash",
            "rider": rider,
            "created_by": staff_member,
        }
        defaults.update(overrides)
        return Shipment.objects.create(**defaults)

    return _make
