"""Repository bases.

Repositories query and stage changes only; the service layer commits.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    def add(self, entity: ModelType) -> None:
        """Stage ``entity`` for insert (no flush/commit)."""
        self.session.add(entity)

    async def flush(self) -> None:
        """Flush pending inserts so generated ids are populated."""
        await self.session.flush()


class AccountScopedRepository(BaseRepository[ModelType]):
    """Rows owned by one account.

    Every lookup and write is filtered by ``account_id`` as well as the id,
    so a row of another account behaves as if it did not exist.
    """

    def _owned(self, row_id: int, account_id: int) -> tuple[ColumnElement[bool], ...]:
        model: Any = self.model
        return (model.id == row_id, model.account_id == account_id)

    async def get(self, row_id: int, account_id: int) -> ModelType | None:
        result = await self.session.execute(
            select(self.model).where(*self._owned(row_id, account_id))
        )
        return result.scalar_one_or_none()

    async def set_active(self, row_id: int, account_id: int, active: bool) -> int:
        """Archive or restore; returns the number of rows changed."""
        result = await self.session.execute(
            update(self.model).where(*self._owned(row_id, account_id)).values(active=active)
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def delete(self, row_id: int, account_id: int) -> int:
        result = await self.session.execute(
            delete(self.model).where(*self._owned(row_id, account_id))
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
