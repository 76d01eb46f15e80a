"""
Tests for the Razorpay gateway wrapper.
"""

import time
from decimal import Decimal

import pytest

from app.errors import GatewayError
from app.services.payment_gateway import GatewayOrder, PaymentGateway, to_minor_units


def test_to_minor_units_rounds_to_cents():
    assert to_minor_units(20) == 2000
    assert to_minor_units(Decimal("19.99")) == 1999
    assert to_minor_units("0.1") == 10
    assert to_minor_units(0.29) == 29


def test_to_minor_units_rounds_half_up():
    assert to_minor_units(Decimal("0.125")) == 13
    assert to_minor_units(Decimal("1.005")) == 101
    assert to_minor_units(Decimal("2.345")) == 235
    assert to_minor_units(Decimal("1.004")) == 100


def test_gateway_order_from_response():
    order = GatewayOrder.from_response({
        "id": "order_1",
        "amount": 500,
        "currency": "USD",
        "status": "paid",
        "notes": [],
    })
    assert order.is_paid
    assert order.notes == {}


@pytest.mark.asyncio
async def test_create_order_payload(gateway, razorpay_client):
    order = await gateway.create_order(
        2500,
        receipt="ORDER-" + "9" * 50,
        notes={"email": "a@b.com", "event_name": None},
    )

    sent = razorpay_client.order.orders[order.id]
    assert sent["amount"] == 2500
    assert sent["currency"] == "USD"
    assert len(sent["receipt"]) == 40
    assert sent["notes"] == {"email": "a@b.com"}
    assert order.status == "created"
    assert not order.is_paid

    credential = gateway.credential_for(order)
    assert credential.order_id == order.id
    assert credential.key_id == "rzp_test_key"


@pytest.mark.asyncio
async def test_fetch_unknown_order_is_gateway_error(gateway):
    with pytest.raises(GatewayError):
        await gateway.fetch_order("order_missing")


@pytest.mark.asyncio
async def test_slow_gateway_times_out(razorpay_client):
    class SlowOrders:
        def fetch(self, order_id):
            time.sleep(0.5)
            return {"id": order_id, "amount": 1, "currency": "USD", "status": "paid"}

    razorpay_client.order = SlowOrders()
    gateway = PaymentGateway("rzp_test_key", "secret", timeout=0.05, client=razorpay_client)

    with pytest.raises(GatewayError) as exc:
        await gateway.fetch_order("order_1")

    assert "timed out" in exc.value.message
