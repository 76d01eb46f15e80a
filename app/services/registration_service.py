"""
Registration Service - event registrations and their payments.

Paid registrations go through three sequential writes: the registration,
the gateway order + local Payment, then the link between them. Each write
is committed on its own, so a failure part-way leaves the registration in
place (pending, without a payment) rather than rolling it back.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFound, ServiceError, ValidationError
from app.fsm.states import RegistrationPaymentStatus
from app.models.event_registration import EventRegistration
from app.schemas.payment import EventDetailsInput, PaymentRead
from app.schemas.registration import (
    EventRegistrationInput,
    EventRegistrationResponse,
    RegistrationRead,
    RegistrationWithPayment,
)
from app.services.base import DatabaseService
from app.services.payment_gateway import PaymentGateway, to_minor_units
from app.services.payment_service import PaymentService, generate_order_reference

logger = logging.getLogger(__name__)


class RegistrationService(DatabaseService):
    """Service for registering people for events."""

    def __init__(self, db: AsyncSession, gateway: Optional[PaymentGateway] = None):
        super().__init__(db)
        self.gateway = gateway
        self.payments = PaymentService(db, gateway)

    async def register(self, data: EventRegistrationInput) -> EventRegistrationResponse:
        """
        Register for an event.

        1. Save the registration (free if amount is 0, else pending)
        2. Free: done, no gateway call and no Payment
        3. Paid: create a gateway order, save a pending Payment, link it
        4. Return the registration and the checkout credential
        """
        if not data.event_name or not data.event_name.strip():
            raise ValidationError("Event name is required")
        if not data.email or not data.email.strip():
            raise ValidationError("Email is required")

        amount = data.payment_amount if data.payment_amount is not None else Decimal("0")
        if amount < 0:
            raise ValidationError("Payment amount cannot be negative")

        registration = EventRegistration(
            event_id=data.event_id,
            event_name=data.event_name,
            event_date=data.event_date,
            event_venue=data.event_venue,
            event_time=data.event_time,
            first_name=data.first_name,
            middle_name=data.middle_name,
            last_name=data.last_name,
            email=data.email,
            contact=data.contact,
            address1=data.address1,
            address2=data.address2,
            city=data.city,
            state=data.state,
            zipcode=data.zipcode,
            payment_amount=amount,
            payment_status=RegistrationPaymentStatus.for_amount(amount).value,
        )
        self.db.add(registration)
        await self._commit("save registration")

        registration_id = registration.registration_id
        logger.info(
            f"Registration {registration_id} created for {data.event_name} ({registration.payment_status})",
            extra={"registration_id": registration_id},
        )

        if registration.is_free:
            return EventRegistrationResponse(
                success=True,
                message="Registration successful",
                registration=RegistrationRead.model_validate(registration),
            )

        try:
            gateway = self.payments.require_gateway()
            order_reference = generate_order_reference()
            order = await gateway.create_order(
                to_minor_units(amount),
                receipt=order_reference,
                notes={
                    "registration_id": registration_id,
                    "event_name": data.event_name,
                    "email": data.email,
                },
            )

            payment = await self.payments.record_order(
                order,
                order_reference=order_reference,
                amount=amount,
                email=data.email,
                registration_id=registration_id,
                full_name=" ".join(
                    part for part in (data.first_name, data.middle_name, data.last_name) if part
                ),
                address1=data.address1,
                address2=data.address2,
                city=data.city,
                state=data.state,
                event=EventDetailsInput(
                    event_name=data.event_name,
                    event_date=data.event_date,
                    event_venue=data.event_venue,
                    event_time=data.event_time,
                ),
            )

            registration.payment_id = payment.payment_id
            registration.payment_status = RegistrationPaymentStatus.PENDING.value
            await self._commit("link payment to registration")
        except ServiceError as e:
            logger.error(
                f"Registration {registration_id} saved without a payment: {e.message}",
                extra={"registration_id": registration_id},
            )
            raise

        return EventRegistrationResponse(
            success=True,
            message="Registration created. Complete the payment to confirm your spot.",
            registration=RegistrationRead.model_validate(registration),
            payment_credential=gateway.credential_for(order),
        )

    async def update_payment_status(
        self,
        registration_id: str,
        status: RegistrationPaymentStatus,
    ) -> EventRegistrationResponse:
        """Explicitly set a registration's payment status."""
        registration = await self.get_registration(registration_id)
        status = RegistrationPaymentStatus(status)

        if registration.is_free and status != RegistrationPaymentStatus.FREE:
            raise ValidationError("Free registrations have no payment to update")
        if not registration.is_free and status == RegistrationPaymentStatus.FREE:
            raise ValidationError("A paid registration cannot be marked free")

        if registration.payment_status != status.value:
            logger.info(
                f"Registration {registration_id}: {registration.payment_status} -> {status.value}",
                extra={"registration_id": registration_id},
            )
            registration.payment_status = status.value
            await self._commit("update registration payment status")

        return EventRegistrationResponse(
            success=True,
            message="Payment status updated successfully",
            registration=RegistrationRead.model_validate(registration),
        )

    async def get_registration(self, registration_id: str) -> EventRegistration:
        result = await self.db.execute(
            select(EventRegistration).where(
                EventRegistration.registration_id == registration_id
            )
        )
        registration = result.scalar_one_or_none()
        if not registration:
            raise NotFound(f"Registration {registration_id} not found")
        return registration

    async def list_registrations(self) -> List[EventRegistration]:
        result = await self.db.execute(
            select(EventRegistration).order_by(EventRegistration.registration_date.desc())
        )
        return list(result.scalars().all())

    async def list_registrations_by_email(self, email: str) -> List[EventRegistration]:
        result = await self.db.execute(
            select(EventRegistration)
            .where(func.lower(EventRegistration.email) == email.strip().lower())
            .order_by(EventRegistration.registration_date.desc())
        )
        return list(result.scalars().all())

    async def get_registration_with_payment(self, registration_id: str) -> RegistrationWithPayment:
        registration = await self.get_registration(registration_id)
        payment = await self.payments.get_payment_by_registration_id(registration_id)

        return RegistrationWithPayment(
            registration=RegistrationRead.model_validate(registration),
            payment=PaymentRead.model_validate(payment) if payment else None,
            is_free_event=registration.is_free,
        )
