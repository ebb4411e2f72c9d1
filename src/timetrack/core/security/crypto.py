"""Cryptographic utilities - password hashing and session tokens."""

import base64
import secrets
from datetime import datetime, timedelta
from functools import lru_cache

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from src.timetrack.core.config import get_settings
from src.timetrack.models.base import utc_now


@lru_cache
def password_hasher() -> PasswordHasher:
    """Argon2id hasher tuned by the ``ARGON2_*`` settings."""
    settings = get_settings()
    return PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


def hash_password(password: str) -> str:
    return password_hasher().hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """True when ``password`` matches ``hashed``; malformed hashes never match."""
    try:
        return password_hasher().verify(hashed, password)
    except (VerificationError, InvalidHashError):
        return False


def generate_token(num_bytes: int) -> str:
    """Random bytes encoded as URL-safe base64 without padding."""
    return base64.urlsafe_b64encode(secrets.token_bytes(num_bytes)).rstrip(b"=").decode("ascii")


def generate_session_token() -> str:
    return generate_token(get_settings().token_length)


def generate_forgot_password_token() -> str:
    return generate_token(get_settings().forgot_password_token_length)


def session_expiration(now: datetime | None = None) -> datetime:
    """Expiration for a session created now (naive UTC)."""
    settings = get_settings()
    return (now or utc_now()) + timedelta(minutes=settings.token_expiration_minutes)
