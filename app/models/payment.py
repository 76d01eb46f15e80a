"""Payment model - one record per Razorpay order."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import String, DateTime, Numeric, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, utcnow
from app.fsm.states import PaymentStatus
from app.models.event_registration import generate_reference


class Payment(Base):
    """
    Payment tied to a donation or an event registration.
    payment_id is the canonical identifier; gateway_order_id is unique so
    there is exactly one Payment per gateway order.
    """

    __tablename__ = "payments"

    payment_id: Mapped[str] = mapped_column(
        String(40),
        primary_key=True,
        default=lambda: generate_reference("PAY"),
    )

    # Back-reference to EventRegistration.registration_id
    registration_id: Mapped[Optional[str]] = mapped_column(
        String(40),
        nullable=True,
        index=True,
    )

    # Razorpay order ID (unique, secondary lookup key)
    gateway_order_id: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )

    order_id: Mapped[str] = mapped_column(String(50), nullable=False)

    amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
    )

    currency: Mapped[str] = mapped_column(
        String(3),
        default="USD",
        nullable=False,
    )

    payment_method: Mapped[str] = mapped_column(
        String(30),
        default="card",
        nullable=False,
    )

    payment_status: Mapped[str] = mapped_column(
        String(20),
        default=PaymentStatus.PENDING.value,
        nullable=False,
        index=True,
    )

    # Payer
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    address1: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    address2: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    is_donation: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    # Event details (event payments only)
    event_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    event_date: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    event_venue: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    event_time: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Set once, when the payment completes
    payment_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime,
        nullable=True,
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utcnow,
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Payment {self.payment_id} {self.gateway_order_id} {self.payment_status}>"

    @property
    def status(self) -> PaymentStatus:
        return PaymentStatus(self.payment_status)
