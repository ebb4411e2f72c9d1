"""Repository for Task entity."""

from sqlalchemy import func
from sqlmodel import select

from src.timetrack.models import Task
from src.timetrack.repositories.base import AccountScopedRepository


class TaskRepository(AccountScopedRepository[Task]):
    model = Task

    async def list_by_status(self, account_id: int, active: bool) -> list[Task]:
        result = await self.session.execute(
            select(Task)
            .where(Task.account_id == account_id, Task.active == active)
            .order_by(func.lower(Task.name))
        )
        return list(result.scalars().all())

    async def get_ids(self, task_ids: list[int], account_id: int) -> set[int]:
        """Subset of ``task_ids`` that belong to the account."""
        if not task_ids:
            return set()
        result = await self.session.execute(
            select(Task.id).where(
                Task.id.in_(task_ids),  # type: ignore[union-attr]
                Task.account_id == account_id,
            )
        )
        return {task_id for task_id in result.scalars().all() if task_id is not None}
