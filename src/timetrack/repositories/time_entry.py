"""Repository for TimeEntry entity."""

from dataclasses import dataclass
from datetime import date

from sqlalchemy import delete, update
from sqlalchemy.dialects.postgresql import insert
from sqlmodel import select

from src.timetrack.models import Client, Project, Task, TimeEntry
from src.timetrack.repositories.base import BaseRepository

TIME_ENTRY_KEY = ("account_id", "profile_id", "project_id", "task_id", "day")


@dataclass
class TimeEntryRow:
    """A time entry with the names it is shown under."""

    day: date
    hours: float
    project_id: int
    task_id: int
    client_name: str
    project_name: str
    task_name: str


class TimeEntryRepository(BaseRepository[TimeEntry]):
    model = TimeEntry

    async def list_for_range(
        self, profile_id: int, account_id: int, start: date, end: date
    ) -> list[TimeEntryRow]:
        result = await self.session.execute(
            select(TimeEntry, Client.name, Project.name, Task.name)
            .join(Project, Project.id == TimeEntry.project_id)  # type: ignore[arg-type]
            .join(Client, Client.id == Project.client_id)  # type: ignore[arg-type]
            .join(Task, Task.id == TimeEntry.task_id)  # type: ignore[arg-type]
            .where(
                TimeEntry.account_id == account_id,
                TimeEntry.profile_id == profile_id,
                TimeEntry.day >= start,
                TimeEntry.day <= end,
            )
            .order_by(TimeEntry.day, TimeEntry.id)
        )
        return [
            TimeEntryRow(
                day=entry.day,
                hours=entry.hours,
                project_id=entry.project_id,
                task_id=entry.task_id,
                client_name=client_name,
                project_name=project_name,
                task_name=task_name,
            )
            for entry, client_name, project_name, task_name in result.all()
        ]

    async def upsert(self, entry: TimeEntry) -> int:
        """Insert the entry; an existing row for the same key takes its hours."""
        stmt = insert(TimeEntry).values(
            account_id=entry.account_id,
            profile_id=entry.profile_id,
            project_id=entry.project_id,
            task_id=entry.task_id,
            day=entry.day,
            hours=entry.hours,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=list(TIME_ENTRY_KEY),
            set_={"hours": stmt.excluded.hours},
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def update_hours(self, entry: TimeEntry) -> int:
        result = await self.session.execute(
            update(TimeEntry)
            .where(
                TimeEntry.account_id == entry.account_id,  # type: ignore[arg-type]
                TimeEntry.profile_id == entry.profile_id,  # type: ignore[arg-type]
                TimeEntry.project_id == entry.project_id,  # type: ignore[arg-type]
                TimeEntry.task_id == entry.task_id,  # type: ignore[arg-type]
                TimeEntry.day == entry.day,  # type: ignore[arg-type]
            )
            .values(hours=entry.hours)
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def insert(self, entry: TimeEntry) -> int:
        """Plain insert; a row already present for the key raises IntegrityError."""
        stmt = insert(TimeEntry).values(
            account_id=entry.account_id,
            profile_id=entry.profile_id,
            project_id=entry.project_id,
            task_id=entry.task_id,
            day=entry.day,
            hours=entry.hours,
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def distinct_project_tasks(
        self, profile_id: int, account_id: int, start: date, end: date
    ) -> list[tuple[int, int]]:
        """(project_id, task_id) pairs with entries in the range."""
        result = await self.session.execute(
            select(TimeEntry.project_id, TimeEntry.task_id)
            .where(
                TimeEntry.profile_id == profile_id,
                TimeEntry.account_id == account_id,
                TimeEntry.day >= start,
                TimeEntry.day <= end,
            )
            .distinct()
            .order_by(TimeEntry.project_id, TimeEntry.task_id)
        )
        return [(project_id, task_id) for project_id, task_id in result.all()]

    async def delete_for_dates(
        self,
        profile_id: int,
        account_id: int,
        project_id: int,
        task_id: int,
        start: date,
        end: date,
    ) -> int:
        result = await self.session.execute(
            delete(TimeEntry).where(
                TimeEntry.profile_id == profile_id,  # type: ignore[arg-type]
                TimeEntry.account_id == account_id,  # type: ignore[arg-type]
                TimeEntry.project_id == project_id,  # type: ignore[arg-type]
                TimeEntry.task_id == task_id,  # type: ignore[arg-type]
                TimeEntry.day >= start,  # type: ignore[arg-type]
                TimeEntry.day <= end,  # type: ignore[arg-type]
            )
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
