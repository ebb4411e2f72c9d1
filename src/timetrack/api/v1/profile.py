"""Profile endpoints - the logged-in user's own details."""

from fastapi import APIRouter

from src.timetrack.api.dependencies import CurrentProfile, ProfileServiceDep
from src.timetrack.schemas.account import ProfileResponse
from src.timetrack.schemas.base import DataResponse, EmptyResponse
from src.timetrack.schemas.profile import PasswordUpdateRequest, ProfileUpdateRequest

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=DataResponse[ProfileResponse], summary="Get own profile")
async def get_profile(context: CurrentProfile) -> DataResponse[ProfileResponse]:
    return DataResponse(
        data=ProfileResponse.from_profile(context.profile, company=context.account.company)
    )


@router.put("", response_model=DataResponse[ProfileResponse], summary="Update own profile")
async def update_profile(
    request: ProfileUpdateRequest, context: CurrentProfile, service: ProfileServiceDep
) -> DataResponse[ProfileResponse]:
    profile = await service.update_profile(
        context.profile,
        email=request.email,
        first_name=request.first_name,
        last_name=request.last_name,
        timezone=request.timezone,
        phone=request.phone,
    )
    return DataResponse(data=ProfileResponse.from_profile(profile, company=context.account.company))


@router.put("/password", response_model=EmptyResponse, summary="Change own password")
async def update_password(
    request: PasswordUpdateRequest, context: CurrentProfile, service: ProfileServiceDep
) -> EmptyResponse:
    await service.update_password(
        context.profile, request.current_password, request.password, request.confirm_password
    )
    return EmptyResponse()
