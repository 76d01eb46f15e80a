"""
Tests for PaymentService.
"""

from datetime import timedelta
from decimal import Decimal

import pydantic
import pytest
from sqlalchemy import func, select

from app.database import utcnow
from app.errors import NotFound, PaymentNotConfirmable, ValidationError
from app.fsm.states import PaymentStatus
from app.models.payment import Payment
from app.schemas.payment import PaymentInput
from app.services.payment_service import PaymentService
from app.services.registration_service import RegistrationService


async def register_paid(db, gateway, registration_input, amount=20):
    service = RegistrationService(db, gateway)
    response = await service.register(registration_input(paymentAmount=amount))
    return service, response


def donation_input(**overrides) -> PaymentInput:
    data = {
        "amount": 25,
        "email": "donor@example.com",
        "fullName": "Meera Iyer",
        "address1": "4 Lake Rd",
        "city": "Seattle",
        "state": "WA",
    }
    data.update(overrides)
    return PaymentInput.model_validate(data)


@pytest.mark.asyncio
async def test_confirm_is_idempotent(db, gateway, razorpay_client, registration_input):
    """Confirming twice keeps the first payment_date."""
    service, response = await register_paid(db, gateway, registration_input)
    order_id = response.payment_credential.order_id
    razorpay_client.order.mark(order_id, "paid")

    first = await service.payments.confirm(order_id)
    paid_at = first.payment_date

    second = await service.payments.confirm(order_id)

    assert second.payment_id == first.payment_id
    assert second.payment_status == "completed"
    assert second.payment_date == paid_at


@pytest.mark.asyncio
async def test_confirm_unpaid_order_changes_nothing(db, gateway, razorpay_client, registration_input):
    """An attempted (not paid) order cannot be confirmed."""
    service, response = await register_paid(db, gateway, registration_input)
    order_id = response.payment_credential.order_id
    razorpay_client.order.mark(order_id, "attempted")

    with pytest.raises(PaymentNotConfirmable) as exc:
        await service.payments.confirm(order_id)

    assert "attempted" in exc.value.message

    payment = await service.payments.get_by_gateway_order_id(order_id)
    assert payment.payment_status == "pending"
    assert payment.payment_date is None

    registration = await service.get_registration(response.registration.registration_id)
    assert registration.payment_status == "pending"


@pytest.mark.asyncio
async def test_confirm_paid_order_without_local_record(db, gateway):
    """Gateway says paid but the Payment write never landed."""
    order = await gateway.create_order(1500, receipt="ORDER-orphan")
    gateway.client.order.mark(order.id, "paid")

    with pytest.raises(NotFound):
        await PaymentService(db, gateway).confirm(order.id)


@pytest.mark.asyncio
async def test_set_status_by_either_identifier(db, gateway, registration_input):
    """Status can be set by payment_id or by gateway order id."""
    service, response = await register_paid(db, gateway, registration_input)
    payments = service.payments

    payment = await payments.set_status(response.registration.payment_id, PaymentStatus.COMPLETED)
    assert payment.payment_status == "completed"
    assert payment.payment_date is not None

    registration = await service.get_registration(response.registration.registration_id)
    assert registration.payment_status == "completed"

    _, other = await register_paid(db, gateway, registration_input, amount=30)
    payment = await payments.set_status(other.payment_credential.order_id, PaymentStatus.FAILED)
    assert payment.payment_status == "failed"
    assert payment.payment_date is None

    registration = await service.get_registration(other.registration.registration_id)
    assert registration.payment_status == "failed"


@pytest.mark.asyncio
async def test_terminal_status_is_final(db, gateway, registration_input):
    service, response = await register_paid(db, gateway, registration_input)
    payment_id = response.registration.payment_id

    await service.payments.set_status(payment_id, PaymentStatus.FAILED)

    with pytest.raises(ValidationError):
        await service.payments.set_status(payment_id, PaymentStatus.COMPLETED)
    with pytest.raises(ValidationError):
        await service.payments.set_status(payment_id, PaymentStatus.PENDING)


@pytest.mark.asyncio
async def test_set_status_unknown_payment(db, gateway):
    with pytest.raises(NotFound):
        await PaymentService(db, gateway).set_status("PAY-missing", PaymentStatus.COMPLETED)


@pytest.mark.asyncio
async def test_create_donation_payment(db, gateway, razorpay_client):
    """A payment without event details is a donation."""
    service = PaymentService(db, gateway)

    response = await service.create_payment(donation_input())

    assert response.success is True
    assert response.payment.is_donation is True
    assert response.payment.payment_status == "pending"
    assert response.payment.registration_id is None
    assert response.payment.event_name is None
    assert response.payment.order_id.startswith("ORDER-")
    assert response.payment_credential.amount == 2500

    order = razorpay_client.order.orders[response.payment_credential.order_id]
    assert order["notes"]["is_event"] == "false"
    assert "event_name" not in order["notes"]


@pytest.mark.asyncio
async def test_create_event_payment(db, gateway):
    service = PaymentService(db, gateway)

    response = await service.create_payment(donation_input(
        amount="12.50",
        isEvent=True,
        eventDetails={"eventName": "Spring Exhibition", "eventDate": "2025-04-12"},
    ))

    assert response.payment.is_donation is False
    assert response.payment.event_name == "Spring Exhibition"
    assert response.payment.event_date == "2025-04-12"
    assert response.payment.amount == 12.5
    assert response.payment_credential.amount == 1250

    payment = await service.get_payment(response.payment.payment_id)
    assert payment.amount == Decimal("12.50")


@pytest.mark.asyncio
async def test_payment_intent_creates_no_record(db, gateway, razorpay_client):
    """Intents are gateway orders only; amount is taken as minor units."""
    service = PaymentService(db, gateway)

    credential = await service.create_payment_intent(4999, "buyer@example.com")

    assert credential.amount == 4999
    assert credential.key_id == "rzp_test_key"
    assert razorpay_client.order.orders[credential.order_id]["notes"] == {"email": "buyer@example.com"}

    count = (await db.execute(select(func.count()).select_from(Payment))).scalar_one()
    assert count == 0


@pytest.mark.asyncio
async def test_lookups(db, gateway, registration_input):
    service, response = await register_paid(db, gateway, registration_input)
    payments = service.payments
    payment_id = response.registration.payment_id

    assert (await payments.get_payment(payment_id)).payment_id == payment_id
    assert (await payments.find_payment(response.payment_credential.order_id)).payment_id == payment_id
    by_registration = await payments.get_payment_by_registration_id(response.registration.registration_id)
    assert by_registration.payment_id == payment_id
    assert await payments.get_payment_by_registration_id("REG-missing") is None
    assert len(await payments.list_payments()) == 1

    with pytest.raises(NotFound):
        await payments.get_payment("PAY-missing")


@pytest.mark.asyncio
async def test_reconcile_pending(db, gateway, razorpay_client, registration_input):
    """Old pending payments are settled from the gateway's view of the order."""
    service = RegistrationService(db, gateway)
    paid = await service.register(registration_input(paymentAmount=10))
    abandoned = await service.register(registration_input(paymentAmount=10))
    recent = await service.register(registration_input(paymentAmount=10))

    razorpay_client.order.mark(paid.payment_credential.order_id, "paid")

    paid_payment = await service.payments.get_payment(paid.registration.payment_id)
    paid_payment.created_at = utcnow() - timedelta(hours=1)
    abandoned_payment = await service.payments.get_payment(abandoned.registration.payment_id)
    abandoned_payment.created_at = utcnow() - timedelta(hours=30)
    await db.commit()

    counts = await service.payments.reconcile_pending(
        older_than=timedelta(minutes=15),
        expire_after=timedelta(hours=24),
    )

    assert counts == {"completed": 1, "failed": 1, "pending": 0}

    assert paid_payment.payment_status == "completed"
    assert abandoned_payment.payment_status == "failed"
    recent_payment = await service.payments.get_payment(recent.registration.payment_id)
    assert recent_payment.payment_status == "pending"

    registration = await service.get_registration(paid.registration.registration_id)
    assert registration.payment_status == "completed"
    registration = await service.get_registration(abandoned.registration.registration_id)
    assert registration.payment_status == "failed"


def test_payment_amount_limited_to_cents():
    with pytest.raises(pydantic.ValidationError):
        donation_input(amount="0.125")


@pytest.mark.asyncio
async def test_expired_payment_completes_when_paid_late(db, gateway, razorpay_client, registration_input):
    """Reconciliation expires an old order; a later payment at the gateway still wins."""
    service, response = await register_paid(db, gateway, registration_input)
    order_id = response.payment_credential.order_id

    payment = await service.payments.get_payment(response.registration.payment_id)
    payment.created_at = utcnow() - timedelta(hours=30)
    await db.commit()

    counts = await service.payments.reconcile_pending(
        older_than=timedelta(minutes=15),
        expire_after=timedelta(hours=24),
    )
    assert counts["failed"] == 1
    assert payment.payment_status == "failed"

    razorpay_client.order.mark(order_id, "paid")
    confirmed = await service.payments.confirm(order_id)

    assert confirmed.payment_status == "completed"
    assert confirmed.payment_date is not None
    registration = await service.get_registration(response.registration.registration_id)
    assert registration.payment_status == "completed"


@pytest.mark.asyncio
async def test_gateway_paid_flag_completes_failed_payment(db, gateway, registration_input):
    service, response = await register_paid(db, gateway, registration_input)
    payment_id = response.registration.payment_id
    await service.payments.set_status(payment_id, PaymentStatus.FAILED)

    payment = await service.payments.set_status(payment_id, PaymentStatus.COMPLETED, gateway_paid=True)

    assert payment.payment_status == "completed"
