"""Repository for LoginAttempt entity."""

from datetime import datetime

from sqlalchemy import func
from sqlmodel import select

from src.timetrack.models import LoginAttempt
from src.timetrack.repositories.base import BaseRepository


class LoginAttemptRepository(BaseRepository[LoginAttempt]):
    model = LoginAttempt

    async def count_since(self, email: str, since: datetime) -> int:
        """Failed attempts for an email after ``since``."""
        result = await self.session.execute(
            select(func.count())
            .select_from(LoginAttempt)
            .where(
                LoginAttempt.email == email,
                LoginAttempt.attempted_at > since,
            )
        )
        return result.scalar_one()
