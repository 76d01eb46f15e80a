"""
Pytest configuration and fixtures.
"""

import os
import sys
from typing import AsyncGenerator
from unittest.mock import AsyncMock

# Settings are read at import time
os.environ.setdefault("APP_ENV", "development")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("RAZORPAY_KEY_ID", "rzp_test_key")
os.environ.setdefault("RAZORPAY_KEY_SECRET", "rzp_test_secret")
os.environ.setdefault("RAZORPAY_WEBHOOK_SECRET", "whsec_test")
os.environ.setdefault("EMAIL_API_KEY", "test-email-key")

sys.path.append(os.getcwd())

import pytest
import pytest_asyncio
import razorpay
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from app.database import Base
import app.models  # noqa: F401
from app.schemas.registration import EventRegistrationInput
from app.services.email_service import EmailService
from app.services.payment_gateway import PaymentGateway

# Use in-memory SQLite for tests
TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


class FakeOrders:
    """Stands in for razorpay.Client().order."""

    def __init__(self):
        self.orders = {}
        self.fail_with = None

    def create(self, data):
        if self.fail_with:
            raise self.fail_with
        order_id = f"order_{len(self.orders) + 1:014d}"
        self.orders[order_id] = {
            "id": order_id,
            "entity": "order",
            "amount": data["amount"],
            "amount_paid": 0,
            "currency": data["currency"],
            "receipt": data["receipt"],
            "status": "created",
            "notes": data.get("notes") or [],
        }
        return dict(self.orders[order_id])

    def fetch(self, order_id):
        if order_id not in self.orders:
            raise razorpay.errors.BadRequestError("The id provided does not exist")
        return dict(self.orders[order_id])

    def mark(self, order_id, status):
        self.orders[order_id]["status"] = status


class FakeRazorpayClient:
    def __init__(self):
        self.order = FakeOrders()


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(TEST_DB_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for a test."""
    async_session = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def razorpay_client() -> FakeRazorpayClient:
    return FakeRazorpayClient()


@pytest.fixture
def gateway(razorpay_client) -> PaymentGateway:
    return PaymentGateway(
        key_id="rzp_test_key",
        key_secret="rzp_test_secret",
        currency="USD",
        timeout=5.0,
        client=razorpay_client,
    )


@pytest.fixture
def email_service() -> AsyncMock:
    return AsyncMock(spec=EmailService)


@pytest.fixture
def registration_input():
    """Factory for a valid registration form; keyword args override fields."""

    def make(**overrides) -> EventRegistrationInput:
        data = {
            "event_id": 1,
            "eventName": "Diwali Art Festival 2024",
            "eventDate": "2024-11-01",
            "eventVenue": "Community Hall",
            "eventTime": "18:00",
            "firstName": "Asha",
            "lastName": "Rao",
            "email": "a@b.com",
            "contact": "5551234567",
            "address1": "12 Main St",
            "city": "Dallas",
            "state": "TX",
            "zipcode": "75001",
            "paymentAmount": 0,
        }
        data.update(overrides)
        return EventRegistrationInput.model_validate(data)

    return make
