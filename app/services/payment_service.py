"""
Payment Service - Razorpay order bookkeeping and payment status sync.
"""

import logging
import time
from datetime import timedelta
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import utcnow
from app.errors import GatewayError, NotFound, PaymentNotConfirmable, ValidationError
from app.fsm.states import PaymentStatus, RegistrationPaymentStatus
from app.models.event_registration import EventRegistration
from app.models.payment import Payment
from app.schemas.payment import (
    EventDetailsInput,
    PaymentCredential,
    PaymentInput,
    PaymentRead,
    PaymentResponse,
)
from app.services.base import DatabaseService
from app.services.payment_gateway import GatewayOrder, PaymentGateway, to_minor_units

logger = logging.getLogger(__name__)


def generate_order_reference() -> str:
    return f"ORDER-{int(time.time() * 1000)}"


class PaymentService(DatabaseService):
    """Service for creating payments and keeping their status in sync."""

    def __init__(self, db: AsyncSession, gateway: Optional[PaymentGateway] = None):
        super().__init__(db)
        self.gateway = gateway

    def require_gateway(self) -> PaymentGateway:
        if self.gateway is None:
            raise RuntimeError("PaymentService was created without a payment gateway")
        return self.gateway

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def find_payment(self, identifier: str) -> Optional[Payment]:
        """Find by payment_id or by gateway order id."""
        result = await self.db.execute(
            select(Payment).where(
                or_(
                    Payment.payment_id == identifier,
                    Payment.gateway_order_id == identifier,
                )
            )
        )
        return result.scalars().first()

    async def get_payment(self, payment_id: str) -> Payment:
        result = await self.db.execute(
            select(Payment).where(Payment.payment_id == payment_id)
        )
        payment = result.scalar_one_or_none()
        if not payment:
            raise NotFound(f"Payment {payment_id} not found")
        return payment

    async def get_by_gateway_order_id(self, gateway_order_id: str) -> Optional[Payment]:
        result = await self.db.execute(
            select(Payment).where(Payment.gateway_order_id == gateway_order_id)
        )
        return result.scalar_one_or_none()

    async def get_payment_by_registration_id(self, registration_id: str) -> Optional[Payment]:
        result = await self.db.execute(
            select(Payment)
            .where(Payment.registration_id == registration_id)
            .order_by(Payment.created_at.desc())
        )
        return result.scalars().first()

    async def list_payments(self) -> List[Payment]:
        result = await self.db.execute(
            select(Payment).order_by(Payment.created_at.desc())
        )
        payments = list(result.scalars().all())
        logger.info(f"Found {len(payments)} payments")
        return payments

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    async def record_order(
        self,
        order: GatewayOrder,
        order_reference: str,
        amount: Decimal,
        email: str,
        registration_id: Optional[str] = None,
        full_name: Optional[str] = None,
        address1: Optional[str] = None,
        address2: Optional[str] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
        event: Optional[EventDetailsInput] = None,
    ) -> Payment:
        """Persist a pending Payment for a freshly created gateway order."""
        payment = Payment(
            registration_id=registration_id,
            gateway_order_id=order.id,
            order_id=order_reference,
            amount=amount,
            currency=order.currency,
            payment_method="card",
            payment_status=PaymentStatus.PENDING.value,
            email=email,
            full_name=full_name,
            address1=address1,
            address2=address2,
            city=city,
            state=state,
            is_donation=event is None,
            event_name=event.event_name if event else None,
            event_date=event.event_date if event else None,
            event_venue=event.event_venue if event else None,
            event_time=event.event_time if event else None,
        )
        self.db.add(payment)
        await self._commit("save payment")

        logger.info(
            f"Payment {payment.payment_id} recorded for order {order.id}",
            extra={"payment_id": payment.payment_id, "gateway_order_id": order.id},
        )
        return payment

    async def create_payment(self, data: PaymentInput) -> PaymentResponse:
        """Create a gateway order and a pending Payment for a donation or event payment."""
        gateway = self.require_gateway()
        order_reference = generate_order_reference()
        event = (data.event_details or EventDetailsInput()) if data.is_event else None

        order = await gateway.create_order(
            to_minor_units(data.amount),
            receipt=order_reference,
            notes={
                "email": data.email,
                "full_name": data.full_name,
                "is_event": "true" if data.is_event else "false",
                "event_name": event.event_name if event else None,
                "event_date": event.event_date if event else None,
            },
        )

        payment = await self.record_order(
            order,
            order_reference=order_reference,
            amount=data.amount,
            email=data.email,
            full_name=data.full_name,
            address1=data.address1,
            address2=data.address2,
            city=data.city,
            state=data.state,
            event=event,
        )

        return PaymentResponse(
            success=True,
            message="Payment created successfully",
            payment=PaymentRead.model_validate(payment),
            payment_credential=gateway.credential_for(order),
        )

    async def create_payment_intent(self, amount_minor: int, email: str) -> PaymentCredential:
        """Bare gateway order with no local record; amount already in minor units."""
        gateway = self.require_gateway()
        order = await gateway.create_order(
            amount_minor,
            receipt=generate_order_reference(),
            notes={"email": email},
        )
        return gateway.credential_for(order)

    # ------------------------------------------------------------------
    # Status synchronization
    # ------------------------------------------------------------------

    async def set_status(
        self,
        identifier: str,
        status: PaymentStatus,
        gateway_paid: bool = False,
    ) -> Payment:
        """
        Set a payment's status by payment_id or gateway order id.

        Stamps payment_date on completion and mirrors the status onto the
        linked registration. gateway_paid is set only by callers that have
        the gateway's word the order is paid (signed webhooks); it lets a
        locally failed payment complete.
        """
        payment = await self.find_payment(identifier)
        if not payment:
            raise NotFound(f"Payment {identifier} not found")

        await self._apply_status(payment, PaymentStatus(status), gateway_paid)
        return payment

    async def confirm(self, gateway_order_id: str) -> Payment:
        """
        Confirm a payment against the gateway.

        Only the gateway's view of the order counts. Confirming an already
        completed payment is a no-op.
        """
        order = await self.require_gateway().fetch_order(gateway_order_id)
        if not order.is_paid:
            raise PaymentNotConfirmable(
                f"Payment is in {order.status} state. Unable to confirm."
            )

        payment = await self.get_by_gateway_order_id(gateway_order_id)
        if not payment:
            # Gateway took the money but our record never landed
            logger.error(
                f"Order {gateway_order_id} is paid but has no local payment record",
                extra={"gateway_order_id": gateway_order_id},
            )
            raise NotFound(f"Payment record not found for order {gateway_order_id}")

        await self._apply_status(payment, PaymentStatus.COMPLETED, gateway_paid=True)
        return payment

    async def reconcile_pending(
        self,
        older_than: timedelta,
        expire_after: timedelta,
    ) -> Dict[str, int]:
        """
        Settle payments left pending because confirm was never called.

        Paid orders are completed; unpaid ones past expire_after are failed.
        """
        gateway = self.require_gateway()
        now = utcnow()

        result = await self.db.execute(
            select(Payment)
            .where(Payment.payment_status == PaymentStatus.PENDING.value)
            .where(Payment.created_at < now - older_than)
            .order_by(Payment.created_at)
        )
        payments = list(result.scalars().all())

        counts = {"completed": 0, "failed": 0, "pending": 0}
        for payment in payments:
            try:
                order = await gateway.fetch_order(payment.gateway_order_id)
            except GatewayError as e:
                logger.warning(f"Could not fetch order {payment.gateway_order_id}: {e}")
                counts["pending"] += 1
                continue

            if order.is_paid:
                await self._apply_status(payment, PaymentStatus.COMPLETED, gateway_paid=True)
                counts["completed"] += 1
            elif payment.created_at < now - expire_after:
                await self._apply_status(payment, PaymentStatus.FAILED)
                counts["failed"] += 1
            else:
                counts["pending"] += 1

        logger.info(f"Reconciled {len(payments)} pending payments: {counts}")
        return counts

    async def _apply_status(
        self,
        payment: Payment,
        status: PaymentStatus,
        gateway_paid: bool = False,
    ) -> None:
        current = payment.status
        if not current.can_transition_to(status, gateway_paid):
            raise ValidationError(
                f"Cannot change payment {payment.payment_id} from {current.value} to {status.value}"
            )

        if current == status:
            logger.info(f"Payment {payment.payment_id} already {status.value}")
        else:
            payment.payment_status = status.value
            if status == PaymentStatus.COMPLETED:
                payment.payment_date = utcnow()
            logger.info(
                f"Payment {payment.payment_id}: {current.value} -> {status.value}",
                extra={"payment_id": payment.payment_id},
            )

        await self._sync_registration(payment)
        await self._commit("update payment status")

    async def _sync_registration(self, payment: Payment) -> None:
        """Mirror the payment status onto its registration, if any."""
        if not payment.registration_id:
            return

        result = await self.db.execute(
            select(EventRegistration).where(
                EventRegistration.registration_id == payment.registration_id
            )
        )
        registration = result.scalar_one_or_none()

        if not registration:
            logger.warning(
                f"Registration {payment.registration_id} for payment {payment.payment_id} not found"
            )
            return

        if registration.is_free:
            return

        new_status = RegistrationPaymentStatus.from_payment(payment.status)
        if registration.payment_status != new_status.value:
            registration.payment_status = new_status.value
            registration.payment_id = payment.payment_id
