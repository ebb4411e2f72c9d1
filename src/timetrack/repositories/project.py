"""Repository for Project entity and its project-task associations."""

from dataclasses import dataclass, field

from sqlalchemy import delete, func
from sqlmodel import select

from src.timetrack.models import Client, Project, ProjectTask, Task
from src.timetrack.repositories.base import AccountScopedRepository


@dataclass
class ProjectTaskDetail:
    task: Task
    terms: ProjectTask


@dataclass
class ProjectDetail:
    project: Project
    client_name: str
    tasks: list[ProjectTaskDetail] = field(default_factory=list)


class ProjectRepository(AccountScopedRepository[Project]):
    model = Project

    def _project_query(self, account_id: int):
        return (
            select(Project, Client.name)
            .join(Client, Client.id == Project.client_id)  # type: ignore[arg-type]
            .where(
                Project.account_id == account_id,
                Client.account_id == account_id,
                Client.active == True,  # noqa: E712
            )
        )

    def _task_query(self, account_id: int):
        return (
            select(Task, ProjectTask)
            .join(ProjectTask, ProjectTask.task_id == Task.id)  # type: ignore[arg-type]
            .where(
                ProjectTask.account_id == account_id,
                Task.account_id == account_id,
                Task.active == True,  # noqa: E712
            )
            .order_by(func.lower(Task.name))
        )

    async def get_detail(self, project_id: int, account_id: int) -> ProjectDetail | None:
        """Project of an active client, with its active tasks."""
        result = await self.session.execute(
            self._project_query(account_id).where(Project.id == project_id)
        )
        row = result.first()
        if row is None:
            return None
        project, client_name = row

        tasks = await self.session.execute(
            self._task_query(account_id).where(ProjectTask.project_id == project_id)
        )
        return ProjectDetail(
            project=project,
            client_name=client_name,
            tasks=[ProjectTaskDetail(task=task, terms=terms) for task, terms in tasks.all()],
        )

    async def list_by_status(self, account_id: int, active: bool) -> list[ProjectDetail]:
        """Projects of active clients, by client then project name."""
        result = await self.session.execute(
            self._project_query(account_id)
            .where(Project.active == active)
            .order_by(func.lower(Client.name), func.lower(Project.name))
        )
        details = [
            ProjectDetail(project=project, client_name=client_name)
            for project, client_name in result.all()
        ]

        by_project = {detail.project.id: detail for detail in details}
        tasks = await self.session.execute(self._task_query(account_id))
        for task, terms in tasks.all():
            detail = by_project.get(terms.project_id)
            if detail is not None:
                detail.tasks.append(ProjectTaskDetail(task=task, terms=terms))

        return details

    async def exists(self, project_id: int, account_id: int) -> bool:
        result = await self.session.execute(
            select(Project.id).where(Project.id == project_id, Project.account_id == account_id)
        )
        return result.scalar_one_or_none() is not None

    async def replace_tasks(
        self, project_id: int, account_id: int, tasks: list[ProjectTask]
    ) -> None:
        """Drop the project's task associations and insert ``tasks`` instead."""
        await self.session.execute(
            delete(ProjectTask).where(
                ProjectTask.project_id == project_id,  # type: ignore[arg-type]
                ProjectTask.account_id == account_id,  # type: ignore[arg-type]
            )
        )
        for terms in tasks:
            terms.project_id = project_id
            terms.account_id = account_id
            self.session.add(terms)
