"""
Payment Gateway - Razorpay Orders API.

An order is the gateway-side record for an amount the payer is about to
pay. The browser completes it with Razorpay Checkout using the order id
and our public key id; the server never sees card data.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, Optional

import razorpay

from app.config import settings
from app.errors import GatewayError
from app.fsm.states import GatewayOrderStatus
from app.schemas.payment import PaymentCredential

logger = logging.getLogger(__name__)


def to_minor_units(amount) -> int:
    """Convert a major-unit amount (e.g. 20.5 USD) to minor units (2050), rounding half up."""
    # str() so floats convert by their shortest repr, not their binary value
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass
class GatewayOrder:
    """Subset of a Razorpay order we rely on."""

    id: str
    amount: int
    currency: str
    status: str
    receipt: Optional[str] = None
    notes: Dict[str, str] = field(default_factory=dict)

    @property
    def is_paid(self) -> bool:
        return self.status == GatewayOrderStatus.PAID.value

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "GatewayOrder":
        notes = data.get("notes") or {}
        # Razorpay returns [] instead of {} for empty notes
        if not isinstance(notes, dict):
            notes = {}
        return cls(
            id=data["id"],
            amount=int(data.get("amount", 0)),
            currency=data.get("currency", settings.payment_currency),
            status=data.get("status", GatewayOrderStatus.CREATED.value),
            receipt=data.get("receipt"),
            notes=notes,
        )


class PaymentGateway:
    """Async wrapper around the (blocking) Razorpay client."""

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        currency: str = "USD",
        timeout: float = 10.0,
        client: Optional[razorpay.Client] = None,
    ):
        self.key_id = key_id
        self.currency = currency
        self.timeout = timeout
        self.client = client or razorpay.Client(auth=(key_id, key_secret))

    async def _call(self, action: str, func: Callable[..., Dict[str, Any]], *args) -> Dict[str, Any]:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(func, *args),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Razorpay {action} timed out after {self.timeout}s")
            raise GatewayError(f"Payment gateway timed out during {action}") from e
        except Exception as e:
            logger.error(f"Razorpay {action} failed: {e}")
            raise GatewayError(f"Payment gateway error during {action}: {e}") from e

    async def create_order(
        self,
        amount_minor: int,
        receipt: str,
        notes: Optional[Dict[str, Any]] = None,
        currency: Optional[str] = None,
    ) -> GatewayOrder:
        """
        Create an order for amount_minor (cents/paise).

        Notes are stored on the Razorpay side so an order can be traced
        back to a registration or payer even if our own write never lands.
        """
        payload = {
            "amount": amount_minor,
            "currency": currency or self.currency,
            # Razorpay limits receipt to 40 characters
            "receipt": receipt[:40],
            "notes": {k: str(v) for k, v in (notes or {}).items() if v is not None},
        }
        data = await self._call("order creation", self.client.order.create, payload)
        order = GatewayOrder.from_response(data)
        logger.info(f"Created Razorpay order {order.id} for {amount_minor} {payload['currency']}")
        return order

    async def fetch_order(self, order_id: str) -> GatewayOrder:
        """Fetch the current state of an order."""
        data = await self._call("order fetch", self.client.order.fetch, order_id)
        return GatewayOrder.from_response(data)

    def credential_for(self, order: GatewayOrder) -> PaymentCredential:
        """What the payer's device needs to open Razorpay Checkout."""
        return PaymentCredential(
            order_id=order.id,
            key_id=self.key_id,
            amount=order.amount,
            currency=order.currency,
        )


def get_payment_gateway() -> PaymentGateway:
    """Build the gateway client from settings. Called once at startup."""
    return PaymentGateway(
        key_id=settings.razorpay_key_id,
        key_secret=settings.razorpay_key_secret,
        currency=settings.payment_currency,
        timeout=settings.gateway_timeout_seconds,
    )
