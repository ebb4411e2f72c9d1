"""Account endpoints - sign-up, settings, closing and membership."""

from fastapi import APIRouter, Response, status

from src.timetrack.api.dependencies import (
    AccountServiceDep,
    ActiveAccountAdmin,
    AdminProfile,
    set_session_cookie,
)
from src.timetrack.core.exceptions import AppError, ErrorCode
from src.timetrack.schemas.account import (
    AccountCreateRequest,
    AccountResponse,
    AccountUpdateRequest,
    AddUserRequest,
    CloseAccountRequest,
    ProfileSummary,
    RemoveUserRequest,
)
from src.timetrack.schemas.auth import AuthResponse
from src.timetrack.schemas.base import DataResponse, EmptyResponse

router = APIRouter(prefix="/account", tags=["account"])


@router.post(
    "",
    response_model=DataResponse[AuthResponse],
    summary="Create an account and its owner",
    responses={400: {"description": "Validation error or profile exists"}},
)
async def create_account(
    request: AccountCreateRequest, response: Response, service: AccountServiceDep
) -> DataResponse[AuthResponse]:
    """Create the account, make the caller its owner and log them in."""
    context = await service.create_account(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        company=request.company,
        timezone=request.timezone,
    )
    set_session_cookie(response, context.session_token())
    return DataResponse(
        data=AuthResponse(
            id=context.profile_id,
            first_name=context.profile.first_name,
            last_name=context.profile.last_name,
            company=context.account.company,
            week_start=context.account.week_start,
        )
    )


@router.get("", response_model=DataResponse[AccountResponse], summary="Get account settings")
async def get_account(
    context: AdminProfile, service: AccountServiceDep
) -> DataResponse[AccountResponse]:
    account = await service.get_account(context.account_id)
    if account is None:
        raise AppError(ErrorCode.ACCOUNT_INACTIVE, "No active account")
    return DataResponse(data=AccountResponse.from_account(account))


@router.put("", response_model=DataResponse[AccountResponse], summary="Update account settings")
async def update_account(
    request: AccountUpdateRequest, context: AdminProfile, service: AccountServiceDep
) -> DataResponse[AccountResponse]:
    account = await service.update_account(
        context.account_id,
        company=request.company,
        week_start=request.week_start,
        timezone=request.timezone,
    )
    return DataResponse(data=AccountResponse.from_account(account))


@router.delete("", response_model=EmptyResponse, summary="Close the account")
async def close_account(
    request: CloseAccountRequest, context: ActiveAccountAdmin, service: AccountServiceDep
) -> EmptyResponse:
    await service.close_account(context.account_id, request.reason or "")
    return EmptyResponse()


@router.get(
    "/users", response_model=DataResponse[list[ProfileSummary]], summary="List account members"
)
async def get_users(
    context: ActiveAccountAdmin, service: AccountServiceDep
) -> DataResponse[list[ProfileSummary]]:
    profiles = await service.get_profiles(context.account_id)
    return DataResponse(data=[ProfileSummary.model_validate(profile) for profile in profiles])


@router.post(
    "/user",
    response_model=EmptyResponse,
    summary="Add a user to the account",
    responses={status.HTTP_200_OK: {"description": "Added, or EmailExistsInAccount error"}},
)
async def add_user(
    request: AddUserRequest, context: ActiveAccountAdmin, service: AccountServiceDep
) -> EmptyResponse:
    """Invite a new profile or associate an existing one with the account."""
    await service.add_user(
        context.account,
        email=request.email,
        first_name=request.first_name,
        last_name=request.last_name,
        role=request.role,
    )
    return EmptyResponse()


@router.delete("/user", response_model=EmptyResponse, summary="Remove a user from the account")
async def remove_user(
    request: RemoveUserRequest, context: ActiveAccountAdmin, service: AccountServiceDep
) -> EmptyResponse:
    if not request.email:
        raise AppError(ErrorCode.MISSING_FIELD, "Missing email", field="email")
    await service.remove_user(context.account_id, request.email)
    return EmptyResponse()
