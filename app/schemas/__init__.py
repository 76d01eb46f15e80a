"""Request and response schemas for the API layer."""

from app.schemas.artist import (
    ArtistLoginInput,
    ArtistRead,
    ArtistSignupInput,
    AuthResponse,
    MessageResponse,
    PasswordResetInput,
    PasswordResetRequestInput,
    ProfileUpdateInput,
    VerifyEmailInput,
)
from app.schemas.payment import (
    EventDetailsInput,
    PaymentCredential,
    PaymentInput,
    PaymentIntentInput,
    PaymentRead,
    PaymentResponse,
    PaymentStatusUpdate,
)
from app.schemas.registration import (
    EventRegistrationInput,
    EventRegistrationResponse,
    RegistrationRead,
    RegistrationStatusUpdate,
    RegistrationWithPayment,
)

__all__ = [
    "ArtistLoginInput",
    "ArtistRead",
    "ArtistSignupInput",
    "AuthResponse",
    "MessageResponse",
    "PasswordResetInput",
    "PasswordResetRequestInput",
    "ProfileUpdateInput",
    "VerifyEmailInput",
    "EventDetailsInput",
    "PaymentCredential",
    "PaymentInput",
    "PaymentIntentInput",
    "PaymentRead",
    "PaymentResponse",
    "PaymentStatusUpdate",
    "EventRegistrationInput",
    "EventRegistrationResponse",
    "RegistrationRead",
    "RegistrationStatusUpdate",
    "RegistrationWithPayment",
]
