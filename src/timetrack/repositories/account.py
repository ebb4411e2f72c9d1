"""Repositories for Account and ProfileAccount (membership) entities."""

from sqlalchemy import delete, update
from sqlmodel import select

from src.timetrack.models import Account, AccountStatus, ProfileAccount
from src.timetrack.models.base import utc_now
from src.timetrack.repositories.base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    model = Account

    async def get_open(self, account_id: int) -> Account | None:
        """Get an account unless it has been archived."""
        result = await self.session.execute(
            select(Account).where(
                Account.id == account_id,
                Account.status != AccountStatus.ARCHIVED.value,
            )
        )
        return result.scalar_one_or_none()


class MembershipRepository(BaseRepository[ProfileAccount]):
    model = ProfileAccount

    async def get(self, profile_id: int, account_id: int) -> ProfileAccount | None:
        result = await self.session.execute(
            select(ProfileAccount).where(
                ProfileAccount.profile_id == profile_id,
                ProfileAccount.account_id == account_id,
            )
        )
        return result.scalar_one_or_none()

    async def touch_last_used(self, profile_id: int, account_id: int) -> int:
        """Mark the membership as the most recently used one for the profile."""
        result = await self.session.execute(
            update(ProfileAccount)
            .where(
                ProfileAccount.profile_id == profile_id,  # type: ignore[arg-type]
                ProfileAccount.account_id == account_id,  # type: ignore[arg-type]
            )
            .values(last_used=utc_now())
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def remove(self, profile_id: int, account_id: int) -> int:
        """Delete the association only. Returns rows deleted."""
        result = await self.session.execute(
            delete(ProfileAccount).where(
                ProfileAccount.profile_id == profile_id,  # type: ignore[arg-type]
                ProfileAccount.account_id == account_id,  # type: ignore[arg-type]
            )
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
