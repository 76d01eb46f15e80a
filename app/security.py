"""
Password hashing, session tokens and one-time email tokens.
"""

import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Tuple

import bcrypt
import jwt

from app.config import settings
from app.errors import InvalidOrExpiredToken, ValidationError

BCRYPT_ROUNDS = 12
BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """One-way bcrypt hash with 12 rounds."""
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_BYTES:
        raise ValidationError("Password must be at most 72 bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(artist_id: int, email: str) -> str:
    """Signed session token, valid for jwt_expiry_hours."""
    now = datetime.now(timezone.utc)
    payload = {
        "id": artist_id,
        "email": email,
        "iat": now,
        "exp": now + timedelta(hours=settings.jwt_expiry_hours),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Decode and verify a session token."""
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as e:
        raise InvalidOrExpiredToken("Session has expired, please log in again") from e
    except jwt.InvalidTokenError as e:
        raise InvalidOrExpiredToken("Invalid session token") from e


def hash_token(raw_token: str) -> str:
    """SHA-256 hex digest; what we store instead of the emailed token."""
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


def generate_token() -> Tuple[str, str]:
    """Return (raw token for the email link, hash for the database)."""
    raw = secrets.token_urlsafe(32)
    return raw, hash_token(raw)
