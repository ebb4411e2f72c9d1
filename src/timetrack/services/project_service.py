"""Project service - projects and the billing terms of their tasks."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.timetrack.core.exceptions import AppError, ErrorCode
from src.timetrack.models import Project, ProjectTask
from src.timetrack.models.base import persisted_id
from src.timetrack.repositories import (
    ClientRepository,
    ProjectDetail,
    ProjectRepository,
    TaskRepository,
)
from src.timetrack.services.base import BaseService


class ProjectService(BaseService):
    def __init__(
        self,
        project_repo: ProjectRepository,
        client_repo: ClientRepository,
        task_repo: TaskRepository,
        session: AsyncSession,
    ):
        super().__init__(session)
        self.project_repo = project_repo
        self.client_repo = client_repo
        self.task_repo = task_repo

    async def get_project(self, project_id: int, account_id: int) -> ProjectDetail:
        async with self.storage_errors("Could not get project data"):
            detail = await self.project_repo.get_detail(project_id, account_id)
        if detail is None:
            raise AppError(ErrorCode.INVALID_PROJECT, "No project data found")
        return detail

    async def list_projects(self, account_id: int, active: bool = True) -> list[ProjectDetail]:
        async with self.storage_errors("Could not get all projects"):
            return await self.project_repo.list_by_status(account_id, active)

    async def _check_references(
        self, account_id: int, client_id: int, tasks: list[ProjectTask]
    ) -> None:
        if await self.client_repo.get(client_id, account_id) is None:
            raise AppError(ErrorCode.INVALID_CLIENT, "Invalid client id for account", field="clientId")

        task_ids = [terms.task_id for terms in tasks]
        known = await self.task_repo.get_ids(task_ids, account_id)
        if len(set(task_ids)) != len(task_ids) or known != set(task_ids):
            raise AppError(ErrorCode.INVALID_TASK, "Invalid task for account", field="tasks")

    async def create_project(
        self,
        account_id: int,
        client_id: int,
        name: str,
        tasks: list[ProjectTask],
        code: str | None = None,
    ) -> ProjectDetail:
        async with self.storage_errors("Could not create project"):
            await self._check_references(account_id, client_id, tasks)

            project = Project(
                account_id=account_id,
                client_id=client_id,
                name=name,
                code=code or None,
                active=True,
            )
            self.project_repo.add(project)
            await self.project_repo.flush()
            project_id = persisted_id(project)
            await self.project_repo.replace_tasks(project_id, account_id, tasks)
            await self.session.commit()

        return await self.get_project(project_id, account_id)

    async def update_project(
        self,
        account_id: int,
        project_id: int,
        client_id: int,
        name: str,
        tasks: list[ProjectTask],
    ) -> ProjectDetail:
        """Rename or move the project and replace its whole task set."""
        async with self.storage_errors("Could not update project"):
            project = await self.project_repo.get(project_id, account_id)
            if project is None:
                raise AppError(ErrorCode.INVALID_PROJECT, "No project found", field="id")
            await self._check_references(account_id, client_id, tasks)

            project.name = name
            project.client_id = client_id
            project.active = True
            await self.project_repo.replace_tasks(project_id, account_id, tasks)
            await self.session.commit()

        return await self.get_project(project_id, account_id)

    async def set_active(self, project_id: int, account_id: int, active: bool) -> None:
        async with self.storage_errors("Could not change project state"):
            updated = await self.project_repo.set_active(project_id, account_id, active)
            if updated == 0:
                raise AppError(ErrorCode.INVALID_PROJECT, "Project not found", field="projectId")
            await self.session.commit()

    async def delete_project(self, project_id: int, account_id: int) -> None:
        async with self.storage_errors("Could not delete project"):
            deleted = await self.project_repo.delete(project_id, account_id)
            if deleted == 0:
                raise AppError(ErrorCode.INVALID_PROJECT, "Project not found", field="projectId")
            await self.session.commit()
