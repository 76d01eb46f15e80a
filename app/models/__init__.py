"""Models package for database models."""

from app.models.artist import Artist
from app.models.event_registration import EventRegistration
from app.models.payment import Payment

__all__ = [
    "Artist",
    "EventRegistration",
    "Payment",
]
