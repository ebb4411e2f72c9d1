"""Security utilities - crypto and response headers.

Re-exports all security-related functions for convenience.
"""

from src.timetrack.core.security.crypto import (
    generate_forgot_password_token,
    generate_session_token,
    generate_token,
    hash_password,
    session_expiration,
    verify_password,
)
from src.timetrack.core.security.headers import SecurityHeadersMiddleware

__all__ = [
    # Crypto
    "generate_forgot_password_token",
    "generate_session_token",
    "generate_token",
    "hash_password",
    "session_expiration",
    "verify_password",
    # Headers
    "SecurityHeadersMiddleware",
]
