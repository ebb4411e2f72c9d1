"""Task endpoints."""

from fastapi import APIRouter

from src.timetrack.api.dependencies import CurrentProfile, TaskServiceDep
from src.timetrack.schemas.base import DataResponse, EmptyResponse
from src.timetrack.schemas.catalog import (
    TaskCreateRequest,
    TaskIdRequest,
    TaskResponse,
    TaskUpdateRequest,
)

router = APIRouter(prefix="/task", tags=["tasks"])


@router.get("/all", response_model=DataResponse[list[TaskResponse]], summary="Active tasks")
async def get_all_tasks(
    context: CurrentProfile, service: TaskServiceDep
) -> DataResponse[list[TaskResponse]]:
    tasks = await service.list_tasks(context.account_id, active=True)
    return DataResponse(data=[TaskResponse.from_task(task) for task in tasks])


@router.get("/archived", response_model=DataResponse[list[TaskResponse]], summary="Archived tasks")
async def get_archived_tasks(
    context: CurrentProfile, service: TaskServiceDep
) -> DataResponse[list[TaskResponse]]:
    tasks = await service.list_tasks(context.account_id, active=False)
    return DataResponse(data=[TaskResponse.from_task(task) for task in tasks])


@router.get("/{task_id}", response_model=DataResponse[TaskResponse], summary="Get a task")
async def get_task(
    task_id: int, context: CurrentProfile, service: TaskServiceDep
) -> DataResponse[TaskResponse]:
    task = await service.get_task(task_id, context.account_id)
    return DataResponse(data=TaskResponse.from_task(task))


@router.post("", response_model=DataResponse[TaskResponse], summary="Create a task")
async def create_task(
    request: TaskCreateRequest, context: CurrentProfile, service: TaskServiceDep
) -> DataResponse[TaskResponse]:
    task = await service.create_task(
        context.account_id,
        name=request.name,
        common=request.common,
        default_rate=request.default_rate,
        default_billable=request.default_billable,
    )
    return DataResponse(data=TaskResponse.from_task(task))


@router.put("", response_model=DataResponse[TaskResponse], summary="Update a task")
async def update_task(
    request: TaskUpdateRequest, context: CurrentProfile, service: TaskServiceDep
) -> DataResponse[TaskResponse]:
    task = await service.update_task(
        context.account_id,
        request.id,
        name=request.name,
        common=request.common,
        default_rate=request.default_rate,
        default_billable=request.default_billable,
    )
    return DataResponse(data=TaskResponse.from_task(task))


@router.put("/archive", response_model=EmptyResponse, summary="Archive a task")
async def archive_task(
    request: TaskIdRequest, context: CurrentProfile, service: TaskServiceDep
) -> EmptyResponse:
    await service.set_active(request.id, context.account_id, active=False)
    return EmptyResponse()


@router.put("/restore", response_model=EmptyResponse, summary="Restore a task")
async def restore_task(
    request: TaskIdRequest, context: CurrentProfile, service: TaskServiceDep
) -> EmptyResponse:
    await service.set_active(request.id, context.account_id, active=True)
    return EmptyResponse()


@router.delete("", response_model=EmptyResponse, summary="Delete a task")
async def delete_task(
    request: TaskIdRequest, context: CurrentProfile, service: TaskServiceDep
) -> EmptyResponse:
    await service.delete_task(request.id, context.account_id)
    return EmptyResponse()
