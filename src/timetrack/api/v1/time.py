"""Time sheet endpoints - weekly entries for the logged-in profile."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Path

from src.timetrack.api.dependencies import CurrentProfile, TimeServiceDep
from src.timetrack.models import ProfileContext, TimeEntry
from src.timetrack.schemas.base import DataResponse, EmptyResponse
from src.timetrack.schemas.time import (
    ProjectDeleteRequest,
    ProjectWeekRequest,
    TimeEntriesRequest,
    TimeRangeResponse,
)
from src.timetrack.services.time_service import current_week_range, week_range_from_date

router = APIRouter(prefix="/time", tags=["time"])


def _entries(context: ProfileContext, request: TimeEntriesRequest) -> list[TimeEntry]:
    return [
        TimeEntry(
            account_id=context.account_id,
            profile_id=context.profile_id,
            project_id=entry.project_id,
            task_id=entry.task_id,
            day=entry.day,
            hours=entry.hours,
        )
        for entry in request.entries or []
    ]


async def _week(
    service: TimeServiceDep, context: ProfileContext, start: date, end: date
) -> DataResponse[TimeRangeResponse]:
    time_range = await service.get_range(context.profile_id, context.account_id, start, end)
    return DataResponse(
        data=TimeRangeResponse.build(time_range.start, time_range.end, time_range.entries)
    )


@router.get("/week", response_model=DataResponse[TimeRangeResponse], summary="This week's entries")
async def get_current_week(
    context: CurrentProfile, service: TimeServiceDep
) -> DataResponse[TimeRangeResponse]:
    """The current week in the profile's timezone, starting on the account's week start."""
    start, end = current_week_range(context.profile.timezone, context.account.week_start)
    return await _week(service, context, start, end)


@router.get(
    "/week/{startDate}",
    response_model=DataResponse[TimeRangeResponse],
    summary="Entries of the week containing a date",
)
async def get_week(
    start_date: Annotated[date, Path(alias="startDate")],
    context: CurrentProfile,
    service: TimeServiceDep,
) -> DataResponse[TimeRangeResponse]:
    start, end = week_range_from_date(start_date, context.account.week_start)
    return await _week(service, context, start, end)


@router.post("", response_model=EmptyResponse, summary="Save or update time entries")
async def save_time_entries(
    request: TimeEntriesRequest, context: CurrentProfile, service: TimeServiceDep
) -> EmptyResponse:
    await service.save_or_update(context.account_id, _entries(context, request))
    return EmptyResponse()


@router.put("", response_model=EmptyResponse, summary="Update time entries")
async def update_time_entries(
    request: TimeEntriesRequest, context: CurrentProfile, service: TimeServiceDep
) -> EmptyResponse:
    await service.update(context.account_id, _entries(context, request))
    return EmptyResponse()


@router.post("/project/week", response_model=EmptyResponse, summary="Add a project to a week")
async def add_project_to_week(
    request: ProjectWeekRequest, context: CurrentProfile, service: TimeServiceDep
) -> EmptyResponse:
    await service.add_initial(
        context.profile_id,
        context.account_id,
        request.project_id,
        request.task_id,
        request.start_date,
        request.end_date,
    )
    return EmptyResponse()


@router.delete(
    "/project/week", response_model=EmptyResponse, summary="Remove a project from a week"
)
async def delete_project_from_week(
    request: ProjectDeleteRequest, context: CurrentProfile, service: TimeServiceDep
) -> EmptyResponse:
    await service.delete_project_for_dates(
        context.profile_id,
        context.account_id,
        request.project_id,
        request.task_id,
        request.start_date,
        request.end_date,
    )
    return EmptyResponse()
