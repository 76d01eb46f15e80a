from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.errors import InvalidOrExpiredToken
from app.security import decode_access_token
from app.services.artist_service import ArtistService
from app.services.email_service import EmailService
from app.services.payment_gateway import PaymentGateway
from app.services.payment_service import PaymentService
from app.services.registration_service import RegistrationService


def get_gateway(request: Request) -> PaymentGateway:
    """Gateway client built once at startup (see app.main.lifespan)."""
    return request.app.state.payment_gateway


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


async def get_registration_service(
    db: AsyncSession = Depends(get_db),
    gateway: PaymentGateway = Depends(get_gateway),
) -> RegistrationService:
    return RegistrationService(db, gateway)


async def get_payment_service(
    db: AsyncSession = Depends(get_db),
    gateway: PaymentGateway = Depends(get_gateway),
) -> PaymentService:
    return PaymentService(db, gateway)


async def get_artist_service(
    db: AsyncSession = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
) -> ArtistService:
    return ArtistService(db, email_service)


async def get_current_artist_id(
    authorization: Optional[str] = Header(None),
) -> int:
    """
    Validate the Bearer session token.
    Returns the artist id if valid, raises 401 otherwise.
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing session token",
        )

    token = authorization.split(" ", 1)[1].strip()
    try:
        claims = decode_access_token(token)
    except InvalidOrExpiredToken as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
        )

    return int(claims["id"])
