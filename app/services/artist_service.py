"""
Artist Service - signup, login, email verification and password reset.
"""

import asyncio
import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import utcnow
from app.errors import (
    Conflict,
    GatewayError,
    InvalidCredentials,
    InvalidOrExpiredToken,
    NotFound,
    NotRegistered,
    NotVerified,
)
from app.models.artist import Artist
from app.schemas.artist import (
    ArtistRead,
    ArtistSignupInput,
    AuthResponse,
    MessageResponse,
    ProfileUpdateInput,
)
from app.security import (
    create_access_token,
    generate_token,
    hash_password,
    hash_token,
    verify_password,
)
from app.services.base import DatabaseService
from app.services.email_service import EmailService

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Emails are matched case-insensitively; stored lower-cased."""
    return email.strip().lower()


class ArtistService(DatabaseService):
    """Service for artist accounts and credentials."""

    def __init__(self, db: AsyncSession, email_service: Optional[EmailService] = None):
        super().__init__(db)
        self.email = email_service or EmailService()

    async def get_artist(self, artist_id: int) -> Artist:
        result = await self.db.execute(
            select(Artist).where(Artist.artist_id == artist_id)
        )
        artist = result.scalar_one_or_none()
        if not artist:
            raise NotFound(f"Artist {artist_id} not found")
        return artist

    async def get_artist_by_email(self, email: str) -> Optional[Artist]:
        result = await self.db.execute(
            select(Artist).where(Artist.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def signup(self, data: ArtistSignupInput) -> AuthResponse:
        """
        Create an unverified account and email a verification link.

        No session token is issued here; login requires a verified email.
        """
        email = normalize_email(data.email)
        if await self.get_artist_by_email(email):
            raise Conflict("Email already registered")

        # bcrypt is CPU-bound; keep it off the event loop
        password_hash = await asyncio.to_thread(hash_password, data.password)
        raw_token, token_hash = generate_token()
        artist = Artist(
            first_name=data.first_name,
            last_name=data.last_name,
            email=email,
            password_hash=password_hash,
            phone_number=data.phone_number,
            city=data.city,
            state=data.state,
            country=data.country,
            is_verified=False,
            verification_token_hash=token_hash,
            verification_token_expires=utcnow() + timedelta(hours=settings.verification_token_ttl_hours),
        )
        self.db.add(artist)
        try:
            await self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent signup for the same email
            await self.db.rollback()
            raise Conflict("Email already registered") from e

        logger.info(f"Artist {artist.artist_id} signed up", extra={"artist_id": artist.artist_id})

        message = "Registration successful. Please check your email to verify your account."
        try:
            await self.email.send_verification_email(artist.email, artist.first_name, raw_token)
        except GatewayError as e:
            logger.warning(f"Verification email for artist {artist.artist_id} not sent: {e.message}")
            message = "Registration successful, but we could not send the verification email."

        return AuthResponse(
            success=True,
            message=message,
            artist=ArtistRead.model_validate(artist),
        )

    async def login(self, email: str, password: str) -> AuthResponse:
        artist = await self.get_artist_by_email(email)
        if not artist:
            raise NotRegistered("No account found for this email")
        if not artist.is_verified:
            raise NotVerified("Please verify your email before logging in")
        if not await asyncio.to_thread(verify_password, password, artist.password_hash):
            raise InvalidCredentials("Invalid credentials")

        logger.info(f"Artist {artist.artist_id} logged in", extra={"artist_id": artist.artist_id})
        return AuthResponse(
            success=True,
            message="Login successful",
            token=create_access_token(artist.artist_id, artist.email),
            artist=ArtistRead.model_validate(artist),
        )

    async def verify_email(self, token: str) -> MessageResponse:
        result = await self.db.execute(
            select(Artist)
            .where(Artist.verification_token_hash == hash_token(token))
            .where(Artist.verification_token_expires > utcnow())
        )
        artist = result.scalar_one_or_none()
        if not artist:
            raise InvalidOrExpiredToken("Invalid or expired verification token")

        artist.is_verified = True
        artist.verification_token_hash = None
        artist.verification_token_expires = None
        await self._commit("verify email")

        logger.info(f"Artist {artist.artist_id} verified", extra={"artist_id": artist.artist_id})
        return MessageResponse(success=True, message="Email verified successfully")

    async def request_password_reset(self, email: str) -> MessageResponse:
        artist = await self.get_artist_by_email(email)
        if not artist:
            raise NotFound("No account found for this email")

        raw_token, token_hash = generate_token()
        artist.reset_password_token_hash = token_hash
        artist.reset_password_expires = utcnow() + timedelta(minutes=settings.reset_token_ttl_minutes)
        await self._commit("save password reset token")

        await self.email.send_password_reset_email(artist.email, artist.first_name, raw_token)

        logger.info(f"Password reset requested for artist {artist.artist_id}")
        return MessageResponse(success=True, message="Password reset email sent")

    async def reset_password(self, token: str, new_password: str) -> MessageResponse:
        result = await self.db.execute(
            select(Artist)
            .where(Artist.reset_password_token_hash == hash_token(token))
            .where(Artist.reset_password_expires > utcnow())
        )
        artist = result.scalar_one_or_none()
        if not artist:
            raise InvalidOrExpiredToken("Password reset token is invalid or has expired")

        # Single commit: new password and cleared token land together
        artist.password_hash = await asyncio.to_thread(hash_password, new_password)
        artist.reset_password_token_hash = None
        artist.reset_password_expires = None
        await self._commit("reset password")

        logger.info(f"Password reset for artist {artist.artist_id}")
        return MessageResponse(success=True, message="Password has been reset successfully")

    async def update_profile(self, artist_id: int, data: ProfileUpdateInput) -> Artist:
        artist = await self.get_artist(artist_id)

        changes = data.model_dump(exclude_unset=True)
        for field_name, value in changes.items():
            setattr(artist, field_name, value)

        if changes:
            await self._commit("update artist profile")
        return artist
