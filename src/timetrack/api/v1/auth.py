"""Authentication endpoints - login, logout and password recovery."""

from fastapi import APIRouter, Request, Response
from slowapi.util import get_remote_address

from src.timetrack.api.dependencies import (
    AuthServiceDep,
    RequestToken,
    clear_session_cookie,
    set_session_cookie,
)
from src.timetrack.core.exceptions import AppError, ErrorCode
from src.timetrack.core.rate_limit import FORGOT_PASSWORD_RATE_LIMIT, LOGIN_RATE_LIMIT, limiter
from src.timetrack.models import ProfileContext
from src.timetrack.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    ForgotPasswordValidateRequest,
    LoginRequest,
    SetupUserRequest,
)
from src.timetrack.schemas.base import DataResponse, EmptyResponse

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(context: ProfileContext) -> DataResponse[AuthResponse]:
    return DataResponse(
        data=AuthResponse(
            id=context.profile_id,
            first_name=context.profile.first_name,
            last_name=context.profile.last_name,
            company=context.account.company,
            week_start=context.account.week_start,
        )
    )


@router.post(
    "/login",
    response_model=DataResponse[AuthResponse],
    summary="Log in with email and password",
    responses={401: {"description": "Unknown profile, wrong password, locked or inactive"}},
)
@limiter.limit(LOGIN_RATE_LIMIT)
async def login(
    request: Request, login_data: LoginRequest, response: Response, service: AuthServiceDep
) -> DataResponse[AuthResponse]:
    """Open a session in the most recently used account and set the session cookie."""
    context = await service.login(
        login_data.email, login_data.password, ip_address=get_remote_address(request)
    )
    set_session_cookie(response, context.session_token())
    return _auth_response(context)


@router.post("/forgot", response_model=EmptyResponse, summary="Email a password reset link")
@limiter.limit(FORGOT_PASSWORD_RATE_LIMIT)
async def forgot_password(
    request: Request, forgot_data: ForgotPasswordRequest, service: AuthServiceDep
) -> EmptyResponse:
    await service.forgot_password(forgot_data.email)
    return EmptyResponse()


@router.post(
    "/forgot/validate", response_model=EmptyResponse, summary="Check a password reset token"
)
async def validate_forgot_password_token(
    request: ForgotPasswordValidateRequest, service: AuthServiceDep
) -> EmptyResponse:
    await service.validate_forgot_password_token(request.forgot_password_token or "")
    return EmptyResponse()


@router.put("/setup", response_model=EmptyResponse, summary="Set the first password of an invitee")
async def setup_new_user(request: SetupUserRequest, service: AuthServiceDep) -> EmptyResponse:
    if not request.token:
        raise AppError(ErrorCode.INVALID_TOKEN, "Missing token", field="token")
    await service.setup_new_user(request.token, request.password)
    return EmptyResponse()


@router.post(
    "/token",
    response_model=DataResponse[AuthResponse],
    summary="Describe the profile behind a token",
    responses={401: {"description": "Token has no profile"}},
)
async def validate_token(token: RequestToken, service: AuthServiceDep) -> DataResponse[AuthResponse]:
    try:
        context = await service.get_context(token)
    except AppError as exc:
        raise AppError(ErrorCode.INVALID_TOKEN, "No profile for token") from exc
    return _auth_response(context)


@router.post("/logout", response_model=EmptyResponse, summary="End the session")
async def logout(token: RequestToken, response: Response, service: AuthServiceDep) -> EmptyResponse:
    await service.logout(token)
    clear_session_cookie(response)
    return EmptyResponse()
