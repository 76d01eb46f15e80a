"""EventRegistration model - one person's signed-up attendance for an event."""

import secrets
import string
import time
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import String, DateTime, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, utcnow
from app.fsm.states import RegistrationPaymentStatus

_ID_ALPHABET = string.ascii_uppercase + string.digits


def generate_reference(prefix: str) -> str:
    """Human-readable unique reference, e.g. REG-1718000000000-K3J9X0Q2A."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{prefix}-{int(time.time() * 1000)}-{suffix}"


class EventRegistration(Base):
    """
    Event registration.
    Event fields are copied at registration time so later edits to the
    event don't rewrite history. Only payment_status and payment_id
    change after creation.
    """

    __tablename__ = "event_registrations"

    registration_id: Mapped[str] = mapped_column(
        String(40),
        primary_key=True,
        default=lambda: generate_reference("REG"),
    )

    event_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
    )

    # Denormalized event details
    event_name: Mapped[str] = mapped_column(String(255), nullable=False)
    event_date: Mapped[str] = mapped_column(String(50), nullable=False)
    event_venue: Mapped[str] = mapped_column(String(255), nullable=False)
    event_time: Mapped[str] = mapped_column(String(50), nullable=False)

    # Registrant
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    middle_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    contact: Mapped[str] = mapped_column(String(50), nullable=False)
    address1: Mapped[str] = mapped_column(String(255), nullable=False)
    address2: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    zipcode: Mapped[str] = mapped_column(String(20), nullable=False)

    # Declared amount (0 for free events)
    payment_amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        default=Decimal("0"),
        nullable=False,
    )

    payment_status: Mapped[str] = mapped_column(
        String(20),
        default=RegistrationPaymentStatus.PENDING.value,
        nullable=False,
    )

    # Linked Payment.payment_id (paid registrations only)
    payment_id: Mapped[Optional[str]] = mapped_column(
        String(40),
        nullable=True,
    )

    # Timestamps
    registration_date: Mapped[datetime] = mapped_column(
        DateTime,
        default=utcnow,
        nullable=False,
    )

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
        return f"<EventRegistration {self.registration_id} {self.payment_status}>"

    @property
    def is_free(self) -> bool:
        return self.payment_status == RegistrationPaymentStatus.FREE.value
