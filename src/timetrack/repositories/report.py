"""Aggregate queries over time entries for the reports.

Every report sums hours from entries with ``hours > 0`` in ``[start, end]``
for one account, split by the billable flag of the project-task terms.
"""

from dataclasses import dataclass
from datetime import date

from sqlalchemy import func, not_
from sqlmodel import select

from src.timetrack.models import Client, Profile, Project, ProjectTask, Task, TimeEntry
from src.timetrack.repositories.base import BaseRepository

PAGE_SIZE = 100


@dataclass
class ReportTotals:
    non_billable_hours: float
    billable_hours: float
    billable_total: float


@dataclass
class ClientReportRow(ReportTotals):
    client_id: int
    client_name: str


@dataclass
class ProjectReportRow(ReportTotals):
    project_id: int
    project_name: str
    client_name: str


@dataclass
class TaskReportRow(ReportTotals):
    task_id: int
    task_name: str
    client_id: int
    client_name: str


@dataclass
class PersonReportRow(ReportTotals):
    profile_id: int
    first_name: str
    last_name: str


def _sums():
    billable = ProjectTask.billable == True  # noqa: E712
    return (
        func.coalesce(func.sum(TimeEntry.hours).filter(not_(billable)), 0.0),
        func.coalesce(func.sum(TimeEntry.hours).filter(billable), 0.0),
        func.coalesce(
            func.sum(TimeEntry.hours * func.coalesce(ProjectTask.rate, 0.0)).filter(billable),
            0.0,
        ),
    )


class ReportRepository(BaseRepository[TimeEntry]):
    model = TimeEntry

    def _entries(self, *columns, account_id: int, start: date, end: date):
        return (
            select(*columns)
            .select_from(TimeEntry)
            .join(
                ProjectTask,
                (ProjectTask.project_id == TimeEntry.project_id)  # type: ignore[arg-type]
                & (ProjectTask.task_id == TimeEntry.task_id)
                & (ProjectTask.account_id == TimeEntry.account_id),
            )
            .where(
                TimeEntry.account_id == account_id,
                TimeEntry.hours > 0.0,
                TimeEntry.day >= start,
                TimeEntry.day <= end,
            )
        )

    @staticmethod
    def _page(query, page: int):
        return query.limit(PAGE_SIZE).offset(max(page, 0) * PAGE_SIZE)

    async def by_client(
        self, account_id: int, start: date, end: date, page: int = 0
    ) -> list[ClientReportRow]:
        query = (
            self._entries(Client.id, Client.name, *_sums(), account_id=account_id, start=start, end=end)
            .join(Project, Project.id == TimeEntry.project_id)  # type: ignore[arg-type]
            .join(Client, Client.id == Project.client_id)  # type: ignore[arg-type]
            .group_by(Client.id, Client.name)
            .order_by(func.lower(Client.name), Client.id)
        )
        result = await self.session.execute(self._page(query, page))
        return [
            ClientReportRow(
                client_id=client_id,
                client_name=client_name,
                non_billable_hours=non_billable,
                billable_hours=billable,
                billable_total=total,
            )
            for client_id, client_name, non_billable, billable, total in result.all()
        ]

    async def by_project(
        self, account_id: int, start: date, end: date, page: int = 0
    ) -> list[ProjectReportRow]:
        query = (
            self._entries(
                Project.id, Project.name, Client.name, *_sums(),
                account_id=account_id, start=start, end=end,
            )
            .join(Project, Project.id == TimeEntry.project_id)  # type: ignore[arg-type]
            .join(Client, Client.id == Project.client_id)  # type: ignore[arg-type]
            .group_by(Project.id, Project.name, Client.name)
            .order_by(func.lower(Project.name), func.lower(Client.name), Project.id)
        )
        result = await self.session.execute(self._page(query, page))
        return [
            ProjectReportRow(
                project_id=project_id,
                project_name=project_name,
                client_name=client_name,
                non_billable_hours=non_billable,
                billable_hours=billable,
                billable_total=total,
            )
            for project_id, project_name, client_name, non_billable, billable, total in result.all()
        ]

    async def by_task(
        self, account_id: int, start: date, end: date, page: int = 0
    ) -> list[TaskReportRow]:
        query = (
            self._entries(
                Task.id, Task.name, Client.id, Client.name, *_sums(),
                account_id=account_id, start=start, end=end,
            )
            .join(Task, Task.id == TimeEntry.task_id)  # type: ignore[arg-type]
            .join(Project, Project.id == TimeEntry.project_id)  # type: ignore[arg-type]
            .join(Client, Client.id == Project.client_id)  # type: ignore[arg-type]
            .group_by(Task.id, Task.name, Client.id, Client.name)
            .order_by(func.lower(Task.name), func.lower(Client.name), Task.id)
        )
        result = await self.session.execute(self._page(query, page))
        return [
            TaskReportRow(
                task_id=task_id,
                task_name=task_name,
                client_id=client_id,
                client_name=client_name,
                non_billable_hours=non_billable,
                billable_hours=billable,
                billable_total=total,
            )
            for task_id, task_name, client_id, client_name, non_billable, billable, total
            in result.all()
        ]

    async def by_person(
        self, account_id: int, start: date, end: date, page: int = 0
    ) -> list[PersonReportRow]:
        query = (
            self._entries(
                Profile.id, Profile.first_name, Profile.last_name, *_sums(),
                account_id=account_id, start=start, end=end,
            )
            .join(Profile, Profile.id == TimeEntry.profile_id)  # type: ignore[arg-type]
            .group_by(Profile.id, Profile.first_name, Profile.last_name)
            .order_by(func.lower(Profile.last_name), func.lower(Profile.first_name), Profile.id)
        )
        result = await self.session.execute(self._page(query, page))
        return [
            PersonReportRow(
                profile_id=profile_id,
                first_name=first_name,
                last_name=last_name,
                non_billable_hours=non_billable,
                billable_hours=billable,
                billable_total=total,
            )
            for profile_id, first_name, last_name, non_billable, billable, total in result.all()
        ]
