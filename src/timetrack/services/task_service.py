"""Task service - the tasks of an account."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.timetrack.core.exceptions import AppError, ErrorCode
from src.timetrack.models import Task
from src.timetrack.repositories import TaskRepository
from src.timetrack.services.base import BaseService


class TaskService(BaseService):
    def __init__(self, task_repo: TaskRepository, session: AsyncSession):
        super().__init__(session)
        self.task_repo = task_repo

    async def get_task(self, task_id: int, account_id: int) -> Task:
        async with self.storage_errors("Could not get task"):
            task = await self.task_repo.get(task_id, account_id)
        if task is None:
            raise AppError(ErrorCode.INVALID_TASK, "No task matching id")
        return task

    async def list_tasks(self, account_id: int, active: bool = True) -> list[Task]:
        async with self.storage_errors("Could not get all tasks"):
            return await self.task_repo.list_by_status(account_id, active)

    async def create_task(
        self,
        account_id: int,
        name: str,
        common: bool = False,
        default_rate: float | None = None,
        default_billable: bool = False,
    ) -> Task:
        """Negative rates are stored as 0."""
        async with self.storage_errors("Failed to save task"):
            task = Task(
                account_id=account_id,
                name=name,
                common=common,
                default_rate=max(default_rate or 0.0, 0.0),
                default_billable=default_billable,
            )
            self.task_repo.add(task)
            await self.session.commit()
        return task

    async def update_task(
        self,
        account_id: int,
        task_id: int,
        name: str,
        common: bool = False,
        default_rate: float | None = None,
        default_billable: bool = False,
    ) -> Task:
        async with self.storage_errors("Failed to update task"):
            task = await self.task_repo.get(task_id, account_id)
            if task is None:
                raise AppError(ErrorCode.INVALID_TASK, "Task not found", field="id")
            task.name = name
            task.common = common
            task.default_rate = max(default_rate or 0.0, 0.0)
            task.default_billable = default_billable
            await self.session.commit()
        return task

    async def set_active(self, task_id: int, account_id: int, active: bool) -> None:
        async with self.storage_errors("Failed to change task state"):
            updated = await self.task_repo.set_active(task_id, account_id, active)
            if updated == 0:
                raise AppError(ErrorCode.INVALID_TASK, "Task not found", field="id")
            await self.session.commit()

    async def delete_task(self, task_id: int, account_id: int) -> None:
        async with self.storage_errors("Failed to delete task"):
            deleted = await self.task_repo.delete(task_id, account_id)
            if deleted == 0:
                raise AppError(ErrorCode.INVALID_TASK, "Task not found", field="id")
            await self.session.commit()
