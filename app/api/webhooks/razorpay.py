"""
Razorpay Webhook Handler.
Verifies signatures and applies order payment events.
"""

import hmac
import hashlib
import logging

from fastapi import APIRouter, Request, HTTPException, Depends

from app.api.deps import get_payment_service
from app.config import settings
from app.errors import ServiceError
from app.fsm.states import PaymentStatus
from app.services.payment_service import PaymentService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/razorpay")
async def razorpay_webhook(
    request: Request,
    payment_service: PaymentService = Depends(get_payment_service),
):
    """
    Handle Razorpay webhook events.

    Key events:
    - order.paid: every payment for the order is captured
    - payment.captured: a payment against the order was captured
    - payment.failed: a single attempt failed; the order stays payable,
      so the local payment is left pending for the reconciliation job
    """
    body = await request.body()
    signature = request.headers.get("X-Razorpay-Signature", "")

    if not verify_razorpay_signature(body, signature):
        logger.error("Invalid Razorpay webhook signature")
        raise HTTPException(status_code=401, detail="Invalid signature")

    payload = await request.json()
    event_type = payload.get("event")
    logger.info(f"Razorpay webhook received: {event_type}")

    order_id = extract_order_id(payload)
    if not order_id:
        logger.info(f"No order id in Razorpay event: {event_type}")
        return {"status": "ignored"}

    try:
        if event_type in ("order.paid", "payment.captured"):
            # Signed by Razorpay, so this is the gateway's own word the order is paid
            await payment_service.set_status(order_id, PaymentStatus.COMPLETED, gateway_paid=True)
        elif event_type == "payment.failed":
            logger.info(f"Payment attempt failed for order {order_id}; awaiting retry or expiry")
        else:
            logger.info(f"Unhandled Razorpay event: {event_type}")
            return {"status": "ignored"}
    except ServiceError as e:
        # Return 200 to prevent excessive retries
        logger.error(f"Error applying Razorpay event {event_type} for order {order_id}: {e.message}")
        return {"status": "error", "message": e.message}

    return {"status": "ok"}


def extract_order_id(payload: dict) -> str:
    """Pull the order id from an order or payment event payload."""
    entities = payload.get("payload", {})
    order = entities.get("order", {}).get("entity", {})
    if order.get("id"):
        return order["id"]
    payment = entities.get("payment", {}).get("entity", {})
    return payment.get("order_id") or ""


def verify_razorpay_signature(payload: bytes, signature: str) -> bool:
    """
    Verify Razorpay webhook signature using HMAC SHA256 over the raw body.
    """
    if not settings.razorpay_webhook_secret:
        logger.warning("Razorpay webhook secret not configured")
        # Skip verification outside production
        return not settings.is_production

    expected_signature = hmac.new(
        settings.razorpay_webhook_secret.encode(),
        payload,
        hashlib.sha256
    ).hexdigest()

    return hmac.compare_digest(expected_signature.encode(), signature.encode())
