"""
Artist Account Endpoints.
"""

import logging

from fastapi import APIRouter, Depends

from app.api.deps import get_artist_service, get_current_artist_id
from app.errors import NotFound
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
from app.services.artist_service import ArtistService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/artists/signup", response_model=AuthResponse)
async def artist_signup(
    data: ArtistSignupInput,
    service: ArtistService = Depends(get_artist_service),
):
    return await service.signup(data)


@router.post("/artists/login", response_model=AuthResponse)
async def artist_login(
    data: ArtistLoginInput,
    service: ArtistService = Depends(get_artist_service),
):
    return await service.login(data.email, data.password)


@router.post("/artists/verify-email", response_model=MessageResponse)
async def verify_email(
    data: VerifyEmailInput,
    service: ArtistService = Depends(get_artist_service),
):
    return await service.verify_email(data.token)


@router.post("/artists/password-reset/request", response_model=MessageResponse)
async def request_password_reset(
    data: PasswordResetRequestInput,
    service: ArtistService = Depends(get_artist_service),
):
    return await service.request_password_reset(data.email)


@router.post("/artists/password-reset", response_model=MessageResponse)
async def reset_password(
    data: PasswordResetInput,
    service: ArtistService = Depends(get_artist_service),
):
    return await service.reset_password(data.token, data.new_password)


@router.get("/artists/me", response_model=ArtistRead)
async def get_my_profile(
    artist_id: int = Depends(get_current_artist_id),
    service: ArtistService = Depends(get_artist_service),
):
    return await service.get_artist(artist_id)


@router.patch("/artists/me", response_model=ArtistRead)
async def update_my_profile(
    data: ProfileUpdateInput,
    artist_id: int = Depends(get_current_artist_id),
    service: ArtistService = Depends(get_artist_service),
):
    return await service.update_profile(artist_id, data)


@router.get("/artists", response_model=ArtistRead)
async def get_artist_by_email(
    email: str,
    service: ArtistService = Depends(get_artist_service),
):
    artist = await service.get_artist_by_email(email)
    if not artist:
        raise NotFound("No artist found for this email")
    return artist


@router.get("/artists/{artist_id}", response_model=ArtistRead)
async def get_artist(
    artist_id: int,
    service: ArtistService = Depends(get_artist_service),
):
    return await service.get_artist(artist_id)
