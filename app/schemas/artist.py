"""
Pydantic models for artist accounts.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.base import InputModel, ReadModel


class ArtistSignupInput(InputModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    # bcrypt only looks at the first 72 bytes
    password: str = Field(..., min_length=8, max_length=72)
    phone_number: str
    city: str
    state: str
    country: str


class ArtistLoginInput(InputModel):
    email: str
    password: str


class PasswordResetRequestInput(InputModel):
    email: str


class PasswordResetInput(InputModel):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=72)


class VerifyEmailInput(InputModel):
    token: str = Field(..., min_length=1)


class ProfileUpdateInput(InputModel):
    bio: Optional[str] = None
    profile_image: Optional[str] = None


class ArtistRead(ReadModel):
    """Artist as returned to clients. Never includes credentials."""

    artist_id: int
    first_name: str
    last_name: str
    email: str
    phone_number: str
    city: str
    state: str
    country: str
    bio: Optional[str] = None
    profile_image: Optional[str] = None
    is_verified: bool
    created_at: datetime


class AuthResponse(ReadModel):
    success: bool
    message: str
    token: Optional[str] = None
    artist: Optional[ArtistRead] = None


class MessageResponse(ReadModel):
    success: bool
    message: str
