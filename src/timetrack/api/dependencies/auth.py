"""Authentication and authorization dependencies.

A request authenticates with a session token taken, in order, from the
``Authorization: Bearer`` header, the ``token`` query parameter or the
session cookie. Authenticated responses refresh the cookie, except logout.
"""

from typing import Annotated

from fastapi import Depends, Header, Query, Request, Response

from src.timetrack.api.dependencies.services import AuthServiceDep
from src.timetrack.core.config import get_settings
from src.timetrack.core.exceptions import AppError, ErrorCode
from src.timetrack.core.logging import bind_profile_context
from src.timetrack.models import ProfileContext
from src.timetrack.models.enums import is_account_status_valid, is_admin

BEARER_TYPE = "Bearer"
LOGOUT_PATH = "/api/auth/logout"


def extract_token(
    authorization: str | None, query_token: str | None, cookie_token: str | None
) -> str:
    """Pick the session token by transport precedence."""
    if authorization:
        parts = authorization.split(" ", 1)
        if len(parts) != 2:
            raise AppError(ErrorCode.INVALID_TOKEN, "Missing authorization token")
        if parts[0] != BEARER_TYPE:
            raise AppError(ErrorCode.INVALID_TOKEN, f"Token not Bearer type: {parts[0]}")
        if parts[1]:
            return parts[1]

    if query_token:
        return query_token
    if cookie_token:
        return cookie_token
    raise AppError(ErrorCode.MISSING_TOKEN, "No token found")


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=settings.cookie_expiration_minutes * 60,
        path="/",
        domain=settings.cookie_domain,
        secure=settings.secure_cookie,
        httponly=True,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    settings = get_settings()
    response.delete_cookie(
        key=settings.cookie_name,
        path="/",
        domain=settings.cookie_domain,
        secure=settings.secure_cookie,
        httponly=True,
        samesite="lax",
    )


async def get_request_token(
    request: Request,
    response: Response,
    authorization: Annotated[str | None, Header()] = None,
    token: Annotated[str | None, Query()] = None,
) -> str:
    """Resolve the request token and refresh the session cookie with it."""
    cookie_token = request.cookies.get(get_settings().cookie_name)
    resolved = extract_token(authorization, token, cookie_token)
    if request.url.path != LOGOUT_PATH:
        set_session_cookie(response, resolved)
    return resolved


RequestToken = Annotated[str, Depends(get_request_token)]


async def get_current_profile(token: RequestToken, service: AuthServiceDep) -> ProfileContext:
    """Load the profile behind the token and check its session is still live."""
    context = await service.get_context(token)
    await service.validate_session(context)
    bind_profile_context(context.profile_id, context.account_id)
    return context


CurrentProfile = Annotated[ProfileContext, Depends(get_current_profile)]


async def require_admin(context: CurrentProfile) -> ProfileContext:
    if not is_admin(context.role):
        raise AppError(ErrorCode.NOT_AUTHORIZED, "Not permitted")
    return context


AdminProfile = Annotated[ProfileContext, Depends(require_admin)]


async def require_active_account(context: AdminProfile) -> ProfileContext:
    """Admin access to an account that is still open."""
    if not is_account_status_valid(context.account.status):
        raise AppError(
            ErrorCode.ACCOUNT_INACTIVE,
            "Account not active",
            detail={"status": context.account.status},
        )
    return context


ActiveAccountAdmin = Annotated[ProfileContext, Depends(require_active_account)]
