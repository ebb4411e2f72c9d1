from pydantic import Field, field_validator

from src.timetrack.core.exceptions import ErrorCode
from src.timetrack.core.validators import (
    CLIENT_NAME_MAX,
    CLIENT_NAME_MIN,
    PROJECT_NAME_MAX,
    PROJECT_NAME_MIN,
    check_length,
    check_positive_id,
    check_required,
)
from src.timetrack.models import Client, Task
from src.timetrack.repositories import ProjectDetail
from src.timetrack.schemas.base import CamelModel

# Clients


class ClientCreateRequest(CamelModel):
    name: str
    address: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = check_required(v, "Missing required client name")
        return check_length(v, CLIENT_NAME_MIN, CLIENT_NAME_MAX, "Client name")


class ClientUpdateRequest(CamelModel):
    id: int = 0
    name: str | None = None
    address: str | None = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: int) -> int:
        return check_positive_id(v, ErrorCode.MISSING_FIELD, "Missing client id")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return check_length(v, CLIENT_NAME_MIN, CLIENT_NAME_MAX, "Client name") if v else None


class ClientIdRequest(CamelModel):
    id: int = 0

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: int) -> int:
        return check_positive_id(v, ErrorCode.MISSING_FIELD, "Missing client id")


class ClientResponse(CamelModel):
    id: int
    name: str
    address: str | None = None

    @classmethod
    def from_client(cls, client: Client) -> "ClientResponse":
        return cls.model_validate(client)


# Projects


class ProjectTaskRequest(CamelModel):
    id: int
    billable: bool = False
    rate: float = 0.0

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: int) -> int:
        return check_positive_id(v, ErrorCode.INVALID_TASK, "Invalid task id")


class ProjectCreateRequest(CamelModel):
    client_id: int = 0
    name: str
    code: str | None = None
    tasks: list[ProjectTaskRequest] = Field(default_factory=list)

    @field_validator("client_id")
    @classmethod
    def validate_client_id(cls, v: int) -> int:
        return check_positive_id(v, ErrorCode.MISSING_FIELD, "Missing required clientId")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = check_required(v, "Missing required name")
        return check_length(v, PROJECT_NAME_MIN, PROJECT_NAME_MAX, "Project name")


class ProjectUpdateRequest(ProjectCreateRequest):
    id: int = 0

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: int) -> int:
        return check_positive_id(v, ErrorCode.MISSING_FIELD, "Missing required project id")


class ProjectIdRequest(CamelModel):
    project_id: int = 0

    @field_validator("project_id")
    @classmethod
    def validate_project_id(cls, v: int) -> int:
        return check_positive_id(v, ErrorCode.MISSING_FIELD, "Missing projectId")


class ProjectTaskResponse(CamelModel):
    id: int
    name: str
    rate: float | None = None
    billable: bool
    active: bool


class ProjectResponse(CamelModel):
    id: int
    name: str
    active: bool
    client_id: int
    code: str | None = None
    client_name: str
    tasks: list[ProjectTaskResponse]

    @classmethod
    def from_detail(cls, detail: ProjectDetail) -> "ProjectResponse":
        return cls.model_validate(
            {
                **detail.project.model_dump(),
                "client_name": detail.client_name,
                "tasks": [
                    ProjectTaskResponse(
                        id=item.terms.task_id,
                        name=item.task.name,
                        rate=item.terms.rate,
                        billable=item.terms.billable,
                        active=item.terms.active,
                    )
                    for item in detail.tasks
                ],
            }
        )


# Tasks


class TaskCreateRequest(CamelModel):
    name: str
    default_rate: float = 0.0
    default_billable: bool = False
    common: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return check_required(v, "Missing required name")


class TaskUpdateRequest(TaskCreateRequest):
    id: int = 0

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: int) -> int:
        return check_positive_id(v, ErrorCode.MISSING_FIELD, "Missing id")


class TaskIdRequest(CamelModel):
    id: int = 0

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: int) -> int:
        return check_positive_id(v, ErrorCode.MISSING_FIELD, "Missing id")


class TaskResponse(CamelModel):
    id: int
    name: str
    default_rate: float | None = None
    default_billable: bool
    task_active: bool
    common: bool

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls.model_validate({**task.model_dump(), "task_active": task.active})
