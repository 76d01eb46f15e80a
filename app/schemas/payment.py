"""
Pydantic models for payment data.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from app.fsm.states import PaymentStatus
from app.schemas.base import InputModel, ReadModel


class EventDetailsInput(InputModel):
    event_name: Optional[str] = None
    event_date: Optional[str] = None
    event_venue: Optional[str] = None
    event_time: Optional[str] = None


class PaymentInput(InputModel):
    """Standalone payment: a donation, or an event payment made outside registration."""

    amount: Decimal = Field(..., gt=0, decimal_places=2, examples=[25.0])
    email: str = Field(..., min_length=3)
    full_name: str = Field(..., min_length=1)
    address1: str
    address2: Optional[str] = None
    city: str
    state: str
    is_event: bool = False
    event_details: Optional[EventDetailsInput] = None


class PaymentIntentInput(InputModel):
    """Raw gateway order; amount is already in minor units."""

    amount: int = Field(..., gt=0, examples=[2000])
    email: str = Field(..., min_length=3)


class PaymentStatusUpdate(InputModel):
    status: PaymentStatus


class PaymentCredential(ReadModel):
    """Everything Razorpay Checkout needs on the payer's device."""

    order_id: str
    key_id: str
    amount: int
    currency: str


class PaymentRead(ReadModel):
    payment_id: str
    registration_id: Optional[str] = None
    gateway_order_id: str
    order_id: str
    amount: float
    currency: str
    payment_method: str
    payment_status: str
    email: str
    full_name: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    is_donation: bool
    event_name: Optional[str] = None
    event_date: Optional[str] = None
    event_venue: Optional[str] = None
    event_time: Optional[str] = None
    payment_date: Optional[datetime] = None
    created_at: datetime


class PaymentResponse(ReadModel):
    success: bool
    message: str
    payment: Optional[PaymentRead] = None
    payment_credential: Optional[PaymentCredential] = None
