"""Rate limiting for the unauthenticated auth endpoints.

Limits are kept in process memory and keyed by client IP. They apply to
login and forgot-password, where credential stuffing is the concern.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.timetrack.core.config import get_settings
from src.timetrack.core.logging import get_logger

logger = get_logger(__name__)

LOGIN_RATE_LIMIT = "10/minute"
FORGOT_PASSWORD_RATE_LIMIT = "5/minute"


def get_rate_limit_key(request: Request) -> str:
    """Key rate limits by client IP only.

    Never include request-controlled values (headers, bodies) in the key;
    rotating them would create unlimited fresh buckets.
    """
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    """Create the limiter. Disabled in the testing environment."""
    settings = get_settings()

    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    return Limiter(key_func=get_rate_limit_key)


# Reads settings at import time; changes need a restart
limiter = create_limiter()
