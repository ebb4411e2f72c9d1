"""Repository for Session entity."""

from datetime import datetime

from sqlalchemy import delete, update
from sqlalchemy.dialects.postgresql import insert
from sqlmodel import select

from src.timetrack.models import (
    Account,
    Profile,
    ProfileAccount,
    ProfileContext,
    Session,
    SessionType,
)
from src.timetrack.repositories.base import BaseRepository


class SessionRepository(BaseRepository[Session]):
    model = Session

    async def upsert(
        self, token: str, profile_id: int, account_id: int, expiration: datetime
    ) -> None:
        """Store a session; an existing row for the token gets the new expiration."""
        stmt = insert(Session).values(
            token=token,
            profile_id=profile_id,
            account_id=account_id,
            expiration=expiration,
            type=SessionType.WEB.value,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Session.token],
            set_={"expiration": stmt.excluded.expiration},
        )
        await self.session.execute(stmt)

    async def get_by_token(self, token: str) -> Session | None:
        result = await self.session.execute(select(Session).where(Session.token == token))
        return result.scalar_one_or_none()

    async def get_context_by_token(self, token: str) -> ProfileContext | None:
        """Load session, profile, membership and account in one query."""
        result = await self.session.execute(
            select(Session, Profile, ProfileAccount, Account)
            .join(Profile, Profile.id == Session.profile_id)  # type: ignore[arg-type]
            .join(
                ProfileAccount,
                (ProfileAccount.profile_id == Session.profile_id)  # type: ignore[arg-type]
                & (ProfileAccount.account_id == Session.account_id),
            )
            .join(Account, Account.id == Session.account_id)  # type: ignore[arg-type]
            .where(Session.token == token)
        )
        row = result.first()
        if row is None:
            return None
        session, profile, membership, account = row
        return ProfileContext(
            profile=profile, account=account, membership=membership, session=session
        )

    async def extend(self, token: str, expiration: datetime) -> int:
        result = await self.session.execute(
            update(Session)
            .where(Session.token == token)  # type: ignore[arg-type]
            .values(expiration=expiration)
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def delete_by_token(self, token: str) -> int:
        result = await self.session.execute(
            delete(Session).where(Session.token == token)  # type: ignore[arg-type]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
