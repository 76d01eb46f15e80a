"""
Pydantic models for event registrations.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from app.fsm.states import RegistrationPaymentStatus
from app.schemas.base import InputModel, ReadModel
from app.schemas.payment import PaymentCredential, PaymentRead


class EventRegistrationInput(InputModel):
    """Registration form submitted by the web client."""

    event_id: int
    event_name: str = Field(..., min_length=1, examples=["Diwali Art Festival 2024"])
    event_date: str
    event_venue: str
    event_time: str
    first_name: str
    middle_name: Optional[str] = None
    last_name: str
    email: str = Field(..., min_length=3)
    contact: str
    address1: str
    address2: Optional[str] = None
    city: str
    state: str
    zipcode: str
    payment_amount: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)


class RegistrationStatusUpdate(InputModel):
    payment_status: RegistrationPaymentStatus


class RegistrationRead(ReadModel):
    registration_id: str
    event_id: int
    event_name: str
    event_date: str
    event_venue: str
    event_time: str
    first_name: str
    middle_name: Optional[str] = None
    last_name: str
    email: str
    contact: str
    address1: str
    address2: Optional[str] = None
    city: str
    state: str
    zipcode: str
    registration_date: datetime
    payment_status: str
    payment_amount: float
    payment_id: Optional[str] = None


class EventRegistrationResponse(ReadModel):
    success: bool
    message: str
    registration: Optional[RegistrationRead] = None
    payment_credential: Optional[PaymentCredential] = None


class RegistrationWithPayment(ReadModel):
    registration: RegistrationRead
    payment: Optional[PaymentRead] = None
    is_free_event: bool
