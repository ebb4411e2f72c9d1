"""Client and project endpoints."""

from datetime import timedelta

from fastapi import APIRouter

from src.timetrack.api.dependencies import (
    ClientServiceDep,
    CurrentProfile,
    ProjectServiceDep,
    TimeServiceDep,
)
from src.timetrack.models import ProjectTask
from src.timetrack.schemas.base import DataResponse, EmptyResponse
from src.timetrack.schemas.catalog import (
    ClientCreateRequest,
    ClientIdRequest,
    ClientResponse,
    ClientUpdateRequest,
    ProjectCreateRequest,
    ProjectIdRequest,
    ProjectResponse,
    ProjectTaskRequest,
    ProjectUpdateRequest,
)
from src.timetrack.schemas.time import DateRangeRequest, TimeRangeResponse

router = APIRouter(prefix="/client", tags=["clients"])


def _project_tasks(account_id: int, tasks: list[ProjectTaskRequest]) -> list[ProjectTask]:
    return [
        ProjectTask(
            project_id=0,
            task_id=task.id,
            account_id=account_id,
            rate=task.rate,
            billable=task.billable,
            active=True,
        )
        for task in tasks
    ]


# Projects. Registered first so "/project/..." is not taken for a client id.


@router.get(
    "/project/all", response_model=DataResponse[list[ProjectResponse]], summary="Active projects"
)
async def get_all_projects(
    context: CurrentProfile, service: ProjectServiceDep
) -> DataResponse[list[ProjectResponse]]:
    projects = await service.list_projects(context.account_id, active=True)
    return DataResponse(data=[ProjectResponse.from_detail(project) for project in projects])


@router.get(
    "/project/archived",
    response_model=DataResponse[list[ProjectResponse]],
    summary="Archived projects",
)
async def get_archived_projects(
    context: CurrentProfile, service: ProjectServiceDep
) -> DataResponse[list[ProjectResponse]]:
    projects = await service.list_projects(context.account_id, active=False)
    return DataResponse(data=[ProjectResponse.from_detail(project) for project in projects])


@router.get(
    "/project/{project_id}", response_model=DataResponse[ProjectResponse], summary="Get a project"
)
async def get_project(
    project_id: int, context: CurrentProfile, service: ProjectServiceDep
) -> DataResponse[ProjectResponse]:
    detail = await service.get_project(project_id, context.account_id)
    return DataResponse(data=ProjectResponse.from_detail(detail))


@router.post("/project", response_model=DataResponse[ProjectResponse], summary="Create a project")
async def create_project(
    request: ProjectCreateRequest, context: CurrentProfile, service: ProjectServiceDep
) -> DataResponse[ProjectResponse]:
    detail = await service.create_project(
        context.account_id,
        client_id=request.client_id,
        name=request.name,
        tasks=_project_tasks(context.account_id, request.tasks),
        code=request.code,
    )
    return DataResponse(data=ProjectResponse.from_detail(detail))


@router.put("/project", response_model=DataResponse[ProjectResponse], summary="Update a project")
async def update_project(
    request: ProjectUpdateRequest, context: CurrentProfile, service: ProjectServiceDep
) -> DataResponse[ProjectResponse]:
    """Rename or move the project; its task list is replaced by the one sent."""
    detail = await service.update_project(
        context.account_id,
        project_id=request.id,
        client_id=request.client_id,
        name=request.name,
        tasks=_project_tasks(context.account_id, request.tasks),
    )
    return DataResponse(data=ProjectResponse.from_detail(detail))


@router.put("/project/archive", response_model=EmptyResponse, summary="Archive a project")
async def archive_project(
    request: ProjectIdRequest, context: CurrentProfile, service: ProjectServiceDep
) -> EmptyResponse:
    await service.set_active(request.project_id, context.account_id, active=False)
    return EmptyResponse()


@router.put("/project/restore", response_model=EmptyResponse, summary="Restore a project")
async def restore_project(
    request: ProjectIdRequest, context: CurrentProfile, service: ProjectServiceDep
) -> EmptyResponse:
    await service.set_active(request.project_id, context.account_id, active=True)
    return EmptyResponse()


@router.delete("/project", response_model=EmptyResponse, summary="Delete a project")
async def delete_project(
    request: ProjectIdRequest, context: CurrentProfile, service: ProjectServiceDep
) -> EmptyResponse:
    await service.delete_project(request.project_id, context.account_id)
    return EmptyResponse()


@router.post(
    "/project/copy/last/week",
    response_model=DataResponse[TimeRangeResponse] | EmptyResponse,
    summary="Carry last week's projects into this week",
)
async def copy_projects_from_last_week(
    request: DateRangeRequest, context: CurrentProfile, service: TimeServiceDep
) -> DataResponse[TimeRangeResponse] | EmptyResponse:
    """Add zero-hour rows for every project/task used the week before ``startDate``.

    Returns the refreshed week, or nothing when last week had no entries.
    """
    prior_start = request.start_date - timedelta(days=7)
    prior_end = prior_start + timedelta(days=6)
    rows = await service.copy_projects_from_date_ranges(
        context.profile_id,
        context.account_id,
        prior_start,
        prior_end,
        request.start_date,
        request.end_date,
    )
    if not rows:
        return EmptyResponse()
    return DataResponse(data=TimeRangeResponse.build(request.start_date, request.end_date, rows))


# Clients


@router.get("/all", response_model=DataResponse[list[ClientResponse]], summary="Active clients")
async def get_all_clients(
    context: CurrentProfile, service: ClientServiceDep
) -> DataResponse[list[ClientResponse]]:
    clients = await service.list_clients(context.account_id, active=True)
    return DataResponse(data=[ClientResponse.from_client(client) for client in clients])


@router.get(
    "/archived", response_model=DataResponse[list[ClientResponse]], summary="Archived clients"
)
async def get_archived_clients(
    context: CurrentProfile, service: ClientServiceDep
) -> DataResponse[list[ClientResponse]]:
    clients = await service.list_clients(context.account_id, active=False)
    return DataResponse(data=[ClientResponse.from_client(client) for client in clients])


@router.get("/{client_id}", response_model=DataResponse[ClientResponse], summary="Get a client")
async def get_client(
    client_id: int, context: CurrentProfile, service: ClientServiceDep
) -> DataResponse[ClientResponse]:
    client = await service.get_client(client_id, context.account_id)
    return DataResponse(data=ClientResponse.from_client(client))


@router.post("", response_model=DataResponse[ClientResponse], summary="Create a client")
async def create_client(
    request: ClientCreateRequest, context: CurrentProfile, service: ClientServiceDep
) -> DataResponse[ClientResponse]:
    client = await service.create_client(context.account_id, request.name, request.address)
    return DataResponse(data=ClientResponse.from_client(client))


@router.put("", response_model=DataResponse[ClientResponse], summary="Update a client")
async def update_client(
    request: ClientUpdateRequest, context: CurrentProfile, service: ClientServiceDep
) -> DataResponse[ClientResponse]:
    client = await service.update_client(
        context.account_id, request.id, name=request.name, address=request.address
    )
    return DataResponse(data=ClientResponse.from_client(client))


@router.put("/archive", response_model=EmptyResponse, summary="Archive a client")
async def archive_client(
    request: ClientIdRequest, context: CurrentProfile, service: ClientServiceDep
) -> EmptyResponse:
    await service.set_active(request.id, context.account_id, active=False)
    return EmptyResponse()


@router.put("/restore", response_model=EmptyResponse, summary="Restore a client")
async def restore_client(
    request: ClientIdRequest, context: CurrentProfile, service: ClientServiceDep
) -> EmptyResponse:
    await service.set_active(request.id, context.account_id, active=True)
    return EmptyResponse()


@router.delete("", response_model=EmptyResponse, summary="Delete a client")
async def delete_client(
    request: ClientIdRequest, context: CurrentProfile, service: ClientServiceDep
) -> EmptyResponse:
    await service.delete_client(request.id, context.account_id)
    return EmptyResponse()
