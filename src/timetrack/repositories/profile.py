"""Repository for Profile entity and the profile/account composite."""

from datetime import datetime

from sqlalchemy import update
from sqlmodel import select

from src.timetrack.models import Account, Profile, ProfileAccount, ProfileContext
from src.timetrack.models.base import utc_now
from src.timetrack.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    model = Profile

    async def get_by_email(self, email: str) -> Profile | None:
        """Get profile by (lower-case) email address."""
        result = await self.session.execute(select(Profile).where(Profile.email == email))
        return result.scalar_one_or_none()

    async def get_context_by_email(self, email: str) -> ProfileContext | None:
        """Load the profile with the account it used most recently."""
        result = await self.session.execute(
            select(Profile, ProfileAccount, Account)
            .join(ProfileAccount, ProfileAccount.profile_id == Profile.id)  # type: ignore[arg-type]
            .join(Account, Account.id == ProfileAccount.account_id)  # type: ignore[arg-type]
            .where(Profile.email == email)
            .order_by(ProfileAccount.last_used.desc())  # type: ignore[attr-defined]
            .limit(1)
        )
        row = result.first()
        if row is None:
            return None
        profile, membership, account = row
        return ProfileContext(profile=profile, account=account, membership=membership)

    async def get_by_forgot_token(self, token: str) -> Profile | None:
        result = await self.session.execute(
            select(Profile).where(Profile.forgot_password_token == token)
        )
        return result.scalar_one_or_none()

    async def list_for_account(self, account_id: int) -> list[Profile]:
        """All profiles associated with an account, by last then first name."""
        result = await self.session.execute(
            select(Profile)
            .join(ProfileAccount, ProfileAccount.profile_id == Profile.id)  # type: ignore[arg-type]
            .where(ProfileAccount.account_id == account_id)
            .order_by(Profile.last_name, Profile.first_name)
        )
        return list(result.scalars().all())

    async def set_locked_until(self, profile_id: int, until: datetime) -> int:
        """Lock the profile until ``until``. Returns rows updated."""
        result = await self.session.execute(
            update(Profile)
            .where(Profile.id == profile_id)  # type: ignore[arg-type]
            .values(locked_until=until, updated_at=utc_now())
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
