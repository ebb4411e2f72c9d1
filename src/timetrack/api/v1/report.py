"""Report endpoints - billable and non-billable totals and their CSV export."""

from collections.abc import Sequence
from datetime import date
from typing import Annotated, TypeVar

from fastapi import APIRouter, Query, Response

from src.timetrack.api.dependencies import CurrentProfile, ReportServiceDep, set_session_cookie
from src.timetrack.core.exceptions import AppError, ErrorCode
from src.timetrack.models import ProfileContext
from src.timetrack.repositories.report import ReportTotals
from src.timetrack.schemas.base import DataResponse
from src.timetrack.schemas.report import (
    ClientReportResponse,
    PersonReportResponse,
    ProjectReportResponse,
    ReportTotalsResponse,
    TaskReportResponse,
)
from src.timetrack.services.report_service import (
    ReportDimension,
    adjust_for_week_start,
    export_filename,
    render_csv,
)
from src.timetrack.services.time_service import today_in_timezone

router = APIRouter(prefix="/report/time", tags=["reports"])

FromDate = Annotated[date | None, Query(alias="from", description="First day, YYYY-MM-DD")]
ToDate = Annotated[date | None, Query(alias="to", description="Last day, defaults to today")]
Page = Annotated[int, Query(ge=0, description="Zero-based page of 100 rows")]


def _date_range(
    context: ProfileContext, start: date | None, end: date | None
) -> tuple[date, date]:
    if start is None:
        raise AppError(ErrorCode.INVALID_FIELD, "No from parameter", field="from")
    return start, end or today_in_timezone(context.profile.timezone)


S = TypeVar("S", bound=ReportTotalsResponse)


def _rows(
    schema: type[S], rows: Sequence[ReportTotals]
) -> DataResponse[list[S]]:
    return DataResponse(data=[schema.model_validate(row) for row in rows])


@router.get(
    "/client", response_model=DataResponse[list[ClientReportResponse]], summary="Totals by client"
)
async def get_time_by_client(
    context: CurrentProfile,
    service: ReportServiceDep,
    start: FromDate = None,
    end: ToDate = None,
    page: Page = 0,
) -> DataResponse[list[ClientReportResponse]]:
    """Totals per client. The range is shifted onto the account's week start."""
    start, end = _date_range(context, start, end)
    start, end = adjust_for_week_start(
        start, end, context.account.week_start, today_in_timezone(context.profile.timezone)
    )
    rows = await service.report(ReportDimension.CLIENT, context.account_id, start, end, page)
    return _rows(ClientReportResponse, rows)


@router.get(
    "/project",
    response_model=DataResponse[list[ProjectReportResponse]],
    summary="Totals by project",
)
async def get_time_by_project(
    context: CurrentProfile,
    service: ReportServiceDep,
    start: FromDate = None,
    end: ToDate = None,
    page: Page = 0,
) -> DataResponse[list[ProjectReportResponse]]:
    start, end = _date_range(context, start, end)
    rows = await service.report(ReportDimension.PROJECT, context.account_id, start, end, page)
    return _rows(ProjectReportResponse, rows)


@router.get(
    "/task", response_model=DataResponse[list[TaskReportResponse]], summary="Totals by task"
)
async def get_time_by_task(
    context: CurrentProfile,
    service: ReportServiceDep,
    start: FromDate = None,
    end: ToDate = None,
    page: Page = 0,
) -> DataResponse[list[TaskReportResponse]]:
    start, end = _date_range(context, start, end)
    rows = await service.report(ReportDimension.TASK, context.account_id, start, end, page)
    return _rows(TaskReportResponse, rows)


@router.get(
    "/person", response_model=DataResponse[list[PersonReportResponse]], summary="Totals by person"
)
async def get_time_by_person(
    context: CurrentProfile,
    service: ReportServiceDep,
    start: FromDate = None,
    end: ToDate = None,
    page: Page = 0,
) -> DataResponse[list[PersonReportResponse]]:
    start, end = _date_range(context, start, end)
    rows = await service.report(ReportDimension.PERSON, context.account_id, start, end, page)
    return _rows(PersonReportResponse, rows)


@router.get(
    "/export/{dimension}",
    response_class=Response,
    summary="Download a report as CSV",
    responses={200: {"content": {"text/csv": {}}}},
)
async def export_time(
    dimension: ReportDimension,
    context: CurrentProfile,
    service: ReportServiceDep,
    start: FromDate = None,
    end: ToDate = None,
) -> Response:
    """First page of the report for ``dimension`` with a header row."""
    start, end = _date_range(context, start, end)
    rows = await service.report(dimension, context.account_id, start, end)
    filename = export_filename(context.account.company, start, end)
    response = Response(
        content=render_csv(dimension, rows),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment;filename={filename}"},
    )
    # Headers set on the injected Response are not merged into a returned Response
    if context.token:
        set_session_cookie(response, context.token)
    return response
