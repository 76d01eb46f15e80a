"""
Event Registration Endpoints.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from app.api.deps import get_registration_service
from app.schemas.registration import (
    EventRegistrationInput,
    EventRegistrationResponse,
    RegistrationRead,
    RegistrationStatusUpdate,
    RegistrationWithPayment,
)
from app.services.registration_service import RegistrationService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/registrations", response_model=EventRegistrationResponse)
async def register_for_event(
    data: EventRegistrationInput,
    service: RegistrationService = Depends(get_registration_service),
):
    """
    Register for an event.

    Free events return the registration only; paid events also return the
    checkout credential for completing payment in the browser.
    """
    return await service.register(data)


@router.get("/registrations", response_model=List[RegistrationRead])
async def list_registrations(
    email: Optional[str] = None,
    service: RegistrationService = Depends(get_registration_service),
):
    if email:
        return await service.list_registrations_by_email(email)
    return await service.list_registrations()


@router.get("/registrations/{registration_id}", response_model=RegistrationRead)
async def get_registration(
    registration_id: str,
    service: RegistrationService = Depends(get_registration_service),
):
    return await service.get_registration(registration_id)


@router.get("/registrations/{registration_id}/payment", response_model=RegistrationWithPayment)
async def get_registration_with_payment(
    registration_id: str,
    service: RegistrationService = Depends(get_registration_service),
):
    return await service.get_registration_with_payment(registration_id)


@router.patch("/registrations/{registration_id}/payment-status", response_model=EventRegistrationResponse)
async def update_registration_payment_status(
    registration_id: str,
    data: RegistrationStatusUpdate,
    service: RegistrationService = Depends(get_registration_service),
):
    return await service.update_payment_status(registration_id, data.payment_status)
