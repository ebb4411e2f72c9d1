"""Profile service - changes a profile makes to itself."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.timetrack.core.exceptions import AppError, ErrorCode
from src.timetrack.core.security import hash_password, verify_password
from src.timetrack.models import Profile
from src.timetrack.models.base import utc_now
from src.timetrack.repositories import ProfileRepository
from src.timetrack.services.base import BaseService


class ProfileService(BaseService):
    def __init__(self, profile_repo: ProfileRepository, session: AsyncSession):
        super().__init__(session)
        self.profile_repo = profile_repo

    async def update_profile(
        self,
        profile: Profile,
        email: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        timezone: str | None = None,
        phone: str | None = None,
    ) -> Profile:
        """Apply the non-empty fields. A new email must not belong to another profile."""
        async with self.storage_errors("Failed to update profile"):
            if email and email.lower() != profile.email:
                email = email.lower()
                if await self.profile_repo.get_by_email(email) is not None:
                    raise AppError(
                        ErrorCode.ACCOUNT_EXISTS, "Profile exists for email", field="email"
                    )
                profile.email = email
            if first_name:
                profile.first_name = first_name
            if last_name:
                profile.last_name = last_name
            if timezone:
                profile.timezone = timezone
            if phone:
                profile.phone = phone
            profile.updated_at = utc_now()
            await self.session.commit()
        return profile

    async def update_password(
        self, profile: Profile, current_password: str, password: str, confirm_password: str
    ) -> None:
        if password != confirm_password:
            raise AppError(ErrorCode.PASSWORD_MISMATCH, "Confirm password does not match")

        if not verify_password(current_password, profile.password):
            raise AppError(ErrorCode.INVALID_PASSWORD, "Passwords do not match")

        async with self.storage_errors("Failed to update password"):
            profile.password = hash_password(password)
            profile.updated_at = utc_now()
            await self.session.commit()
