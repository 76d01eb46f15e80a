"""Services package."""

from app.services.artist_service import ArtistService
from app.services.email_service import EmailService
from app.services.payment_gateway import PaymentGateway, get_payment_gateway
from app.services.payment_service import PaymentService
from app.services.registration_service import RegistrationService

__all__ = [
    "ArtistService",
    "EmailService",
    "PaymentGateway",
    "get_payment_gateway",
    "PaymentService",
    "RegistrationService",
]
