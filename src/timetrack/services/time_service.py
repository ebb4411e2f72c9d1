"""Time entry service - week ranges and reconciliation of logged hours."""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy.ext.asyncio import AsyncSession

from src.timetrack.core.exceptions import AppError, ErrorCode
from src.timetrack.core.logging import get_logger
from src.timetrack.models import MAX_HOURS, TimeEntry
from src.timetrack.models.base import utc_now
from src.timetrack.models.enums import is_week_start
from src.timetrack.repositories import (
    ProjectRepository,
    TaskRepository,
    TimeEntryRepository,
    TimeEntryRow,
)
from src.timetrack.services.base import BaseService

logger = get_logger(__name__)

MONDAY = 1
DAYS_IN_WEEK = 7


def weekday_number(day: date) -> int:
    """Weekday with 0 as Sunday and 6 as Saturday."""
    return (day.weekday() + 1) % DAYS_IN_WEEK


def week_start_or_default(week_start: int | None) -> int:
    if week_start is None or not is_week_start(week_start):
        logger.warning("Invalid week start, using Monday", week_start=week_start)
        return MONDAY
    return week_start


def week_range_from_date(day: date, week_start: int) -> tuple[date, date]:
    """The 7-day range starting on ``week_start`` that contains ``day``."""
    week_start = week_start_or_default(week_start)
    start = day - timedelta(days=(weekday_number(day) - week_start) % DAYS_IN_WEEK)
    return start, start + timedelta(days=DAYS_IN_WEEK - 1)


def today_in_timezone(timezone: str | None, now: datetime | None = None) -> date:
    """Current date for the zone; unknown zones fall back to UTC."""
    now = now or utc_now()
    try:
        zone = ZoneInfo(timezone or "UTC")
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone, using UTC", timezone=timezone)
        zone = ZoneInfo("UTC")
    return now.replace(tzinfo=ZoneInfo("UTC")).astimezone(zone).date()


def current_week_range(
    timezone: str | None, week_start: int, now: datetime | None = None
) -> tuple[date, date]:
    return week_range_from_date(today_in_timezone(timezone, now), week_start)


def days_between(start: date, end: date) -> Iterator[date]:
    """Every day from ``start`` to ``end`` inclusive."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def clamp_hours(hours: float, *, cap: bool = False) -> float:
    if hours < 0:
        return 0.0
    if cap and hours > MAX_HOURS:
        logger.warning("Hours above maximum, capping", hours=hours, maximum=MAX_HOURS)
        return MAX_HOURS
    return hours


@dataclass
class TimeRange:
    start: date
    end: date
    entries: list[TimeEntryRow]


class TimeService(BaseService):
    def __init__(
        self,
        time_repo: TimeEntryRepository,
        project_repo: ProjectRepository,
        task_repo: TaskRepository,
        session: AsyncSession,
    ):
        super().__init__(session)
        self.time_repo = time_repo
        self.project_repo = project_repo
        self.task_repo = task_repo

    async def _check_references(self, account_id: int, pairs: set[tuple[int, int]]) -> None:
        """Projects and tasks must belong to the account being written to."""
        for project_id in {project_id for project_id, _ in pairs}:
            if not await self.project_repo.exists(project_id, account_id):
                raise AppError(ErrorCode.INVALID_PROJECT, "Invalid project", field="projectId")
        task_ids = {task_id for _, task_id in pairs}
        if await self.task_repo.get_ids(list(task_ids), account_id) != task_ids:
            raise AppError(ErrorCode.INVALID_TASK, "Invalid task", field="taskId")

    async def get_range(
        self, profile_id: int, account_id: int, start: date, end: date
    ) -> TimeRange:
        async with self.storage_errors("Could not get time entries"):
            rows = await self.time_repo.list_for_range(profile_id, account_id, start, end)
        return TimeRange(start=start, end=end, entries=rows)

    async def save_or_update(self, account_id: int, entries: list[TimeEntry]) -> None:
        """Upsert every entry in one transaction; negative hours become 0."""
        async with self.storage_errors("Failed to save or update time entries"):
            await self._check_references(
                account_id, {(entry.project_id, entry.task_id) for entry in entries}
            )
            for entry in entries:
                entry.hours = clamp_hours(entry.hours)
                await self.time_repo.upsert(entry)
            await self.session.commit()

    async def update(self, account_id: int, entries: list[TimeEntry]) -> None:
        """Update every entry, inserting the ones with no row yet.

        Hours are clamped to ``[0, MAX_HOURS]``.
        """
        async with self.storage_errors("Failed to update time entries"):
            await self._check_references(
                account_id, {(entry.project_id, entry.task_id) for entry in entries}
            )
            for entry in entries:
                entry.hours = clamp_hours(entry.hours, cap=True)
                if await self.time_repo.update_hours(entry) == 0:
                    logger.debug("No time entry to update, inserting", day=entry.day.isoformat())
                    if await self.time_repo.insert(entry) == 0:
                        raise AppError(ErrorCode.SYSTEM_ERROR, "Failed to update time entries")
            await self.session.commit()

    async def add_initial(
        self,
        profile_id: int,
        account_id: int,
        project_id: int,
        task_id: int,
        start: date,
        end: date,
    ) -> None:
        """Zero-hour rows for the project/task on each day of the range."""
        async with self.storage_errors("Failed to add initial project time entries"):
            await self._check_references(account_id, {(project_id, task_id)})
            for day in days_between(start, end):
                inserted = await self.time_repo.insert(
                    TimeEntry(
                        account_id=account_id,
                        profile_id=profile_id,
                        project_id=project_id,
                        task_id=task_id,
                        day=day,
                        hours=0.0,
                    )
                )
                if inserted == 0:
                    raise AppError(
                        ErrorCode.SYSTEM_ERROR, "Failed to add initial project time entries"
                    )
            await self.session.commit()

    async def copy_projects_from_date_ranges(
        self,
        profile_id: int,
        account_id: int,
        from_start: date,
        from_end: date,
        to_start: date,
        to_end: date,
    ) -> list[TimeEntryRow]:
        """Carry the project/task pairs of one range into another as zero rows.

        Returns the entries of the target range, or nothing when the source
        range had no entries. All or nothing: a pair already present on any
        target day rolls the whole copy back.
        """
        async with self.storage_errors("Error copying projects from prior date range"):
            pairs = await self.time_repo.distinct_project_tasks(
                profile_id, account_id, from_start, from_end
            )
            if not pairs:
                return []

            for day in days_between(to_start, to_end):
                for project_id, task_id in pairs:
                    inserted = await self.time_repo.insert(
                        TimeEntry(
                            account_id=account_id,
                            profile_id=profile_id,
                            project_id=project_id,
                            task_id=task_id,
                            day=day,
                            hours=0.0,
                        )
                    )
                    if inserted == 0:
                        raise AppError(
                            ErrorCode.SYSTEM_ERROR, "Error copying projects from prior date range"
                        )
            await self.session.commit()

        async with self.storage_errors("Failed to get time entries for 'to' date range"):
            return await self.time_repo.list_for_range(profile_id, account_id, to_start, to_end)

    async def delete_project_for_dates(
        self,
        profile_id: int,
        account_id: int,
        project_id: int,
        task_id: int,
        start: date,
        end: date,
    ) -> None:
        async with self.storage_errors("Failed to delete project from time entries"):
            deleted = await self.time_repo.delete_for_dates(
                profile_id, account_id, project_id, task_id, start, end
            )
            if deleted == 0:
                raise AppError(
                    ErrorCode.INVALID_FIELD, "No matching project/task time entries found"
                )
            await self.session.commit()
