"""Report service - billable/non-billable totals and their CSV export."""

import csv
import io
import re
from collections.abc import Sequence
from datetime import date, timedelta
from enum import Enum

from sqlalchemy.ext.asyncio import AsyncSession

from src.timetrack.repositories import ReportRepository
from src.timetrack.repositories.report import (
    ClientReportRow,
    PersonReportRow,
    ProjectReportRow,
    ReportTotals,
    TaskReportRow,
)
from src.timetrack.services.base import BaseService
from src.timetrack.services.time_service import DAYS_IN_WEEK, weekday_number

TOTAL_HEADERS = ["Non-Billable Hours", "Billable Hours", "Billable Total"]


class ReportDimension(str, Enum):
    CLIENT = "client"
    PROJECT = "project"
    TASK = "task"
    PERSON = "person"


def adjust_for_week_start(
    start: date, end: date, week_start: int, today: date
) -> tuple[date, date]:
    """Shift a Sunday-based range onto the account's week start.

    The shift is forward by ``week_start`` days when today's weekday has
    reached it, otherwise back into the previous week.
    """
    if week_start <= weekday_number(today):
        shift = week_start
    else:
        shift = week_start - DAYS_IN_WEEK
    offset = timedelta(days=shift)
    return start + offset, end + offset


def format_amount(value: float | None) -> str:
    return " %0.2f" % (value or 0.0)


def export_filename(company: str, start: date, end: date) -> str:
    safe_company = re.sub(r"[^a-zA-Z0-9]+", "-", company)
    return f"export_{safe_company}_{start.isoformat()}_to_{end.isoformat()}.csv"


def _labels(dimension: ReportDimension, row: ReportTotals) -> list[str]:
    if isinstance(row, ClientReportRow):
        return [row.client_name]
    if isinstance(row, ProjectReportRow):
        return [row.client_name, row.project_name]
    if isinstance(row, TaskReportRow):
        return [row.task_name]
    if isinstance(row, PersonReportRow):
        return [row.last_name, row.first_name]
    raise ValueError(f"Unknown report row for {dimension.value}")


_HEADER_LABELS = {
    ReportDimension.CLIENT: ["Client Name"],
    ReportDimension.PROJECT: ["Client Name", "Project Name"],
    ReportDimension.TASK: ["Task Name"],
    ReportDimension.PERSON: ["Last Name", "First Name"],
}


def render_csv(dimension: ReportDimension, rows: Sequence[ReportTotals]) -> str:
    """Header row then one line per report row, amounts with two decimals."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(_HEADER_LABELS[dimension] + TOTAL_HEADERS)
    for row in rows:
        writer.writerow(
            _labels(dimension, row)
            + [
                format_amount(row.non_billable_hours),
                format_amount(row.billable_hours),
                format_amount(row.billable_total),
            ]
        )
    return buffer.getvalue()


class ReportService(BaseService):
    def __init__(self, report_repo: ReportRepository, session: AsyncSession):
        super().__init__(session)
        self.report_repo = report_repo

    async def report(
        self,
        dimension: ReportDimension,
        account_id: int,
        start: date,
        end: date,
        page: int = 0,
    ) -> Sequence[ReportTotals]:
        async with self.storage_errors(f"Failed to get {dimension.value} report"):
            if dimension is ReportDimension.CLIENT:
                return await self.report_repo.by_client(account_id, start, end, page)
            if dimension is ReportDimension.PROJECT:
                return await self.report_repo.by_project(account_id, start, end, page)
            if dimension is ReportDimension.TASK:
                return await self.report_repo.by_task(account_id, start, end, page)
            return await self.report_repo.by_person(account_id, start, end, page)
