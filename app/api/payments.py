"""
Payment Endpoints.
Creation, lookup, explicit status updates and gateway confirmation.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from app.api.deps import get_payment_service
from app.schemas.payment import (
    PaymentCredential,
    PaymentInput,
    PaymentIntentInput,
    PaymentRead,
    PaymentResponse,
    PaymentStatusUpdate,
)
from app.services.payment_service import PaymentService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/payments", response_model=PaymentResponse)
async def create_payment(
    data: PaymentInput,
    service: PaymentService = Depends(get_payment_service),
):
    """Create a donation or event payment and its gateway order."""
    return await service.create_payment(data)


@router.post("/payments/intents", response_model=PaymentCredential)
async def create_payment_intent(
    data: PaymentIntentInput,
    service: PaymentService = Depends(get_payment_service),
):
    """Gateway order only, no local record. Amount is in minor units."""
    return await service.create_payment_intent(data.amount, data.email)


@router.get("/payments", response_model=List[PaymentRead])
async def list_payments(
    service: PaymentService = Depends(get_payment_service),
):
    return await service.list_payments()


@router.get("/payments/by-registration/{registration_id}", response_model=Optional[PaymentRead])
async def get_payment_by_registration(
    registration_id: str,
    service: PaymentService = Depends(get_payment_service),
):
    return await service.get_payment_by_registration_id(registration_id)


@router.get("/payments/{payment_id}", response_model=PaymentRead)
async def get_payment(
    payment_id: str,
    service: PaymentService = Depends(get_payment_service),
):
    return await service.get_payment(payment_id)


@router.patch("/payments/{identifier}/status", response_model=PaymentResponse)
async def update_payment_status(
    identifier: str,
    data: PaymentStatusUpdate,
    service: PaymentService = Depends(get_payment_service),
):
    """Set status by payment_id or gateway order id."""
    payment = await service.set_status(identifier, data.status)
    return PaymentResponse(
        success=True,
        message="Payment status updated successfully",
        payment=PaymentRead.model_validate(payment),
    )


@router.post("/payments/{gateway_order_id}/confirm", response_model=PaymentResponse)
async def confirm_payment(
    gateway_order_id: str,
    service: PaymentService = Depends(get_payment_service),
):
    """Confirm with the gateway that the order has been paid."""
    payment = await service.confirm(gateway_order_id)
    return PaymentResponse(
        success=True,
        message="Payment confirmed",
        payment=PaymentRead.model_validate(payment),
    )
