from datetime import date, timedelta
from typing import Any

from pydantic import field_validator, model_validator
from pydantic_core import PydanticCustomError

from src.timetrack.core.exceptions import ErrorCode
from src.timetrack.core.validators import check_positive_id
from src.timetrack.repositories import TimeEntryRow
from src.timetrack.schemas.base import CamelModel

MAX_DELETE_DAYS = 7


class TimeEntryRequest(CamelModel):
    day: date
    hours: float = 0.0
    project_id: int = 0
    task_id: int = 0

    @field_validator("project_id")
    @classmethod
    def validate_project_id(cls, v: int) -> int:
        return check_positive_id(v, ErrorCode.INVALID_FIELD, "Invalid project id")

    @field_validator("task_id")
    @classmethod
    def validate_task_id(cls, v: int) -> int:
        return check_positive_id(v, ErrorCode.INVALID_FIELD, "Invalid task id")


class TimeEntriesRequest(CamelModel):
    entries: list[TimeEntryRequest] | None = None

    @field_validator("entries")
    @classmethod
    def validate_entries(cls, v: list[TimeEntryRequest] | None) -> list[TimeEntryRequest]:
        if v is None:
            raise PydanticCustomError(ErrorCode.INVALID_JSON.value, "Missing time entries")
        return v


class DateRangeRequest(CamelModel):
    """A ``startDate``/``endDate`` pair; an absent or blank date is InvalidField."""

    start_date: date
    end_date: date

    @model_validator(mode="before")
    @classmethod
    def require_dates(cls, data: Any) -> Any:
        if isinstance(data, dict):
            for name, alias in (("start_date", "startDate"), ("end_date", "endDate")):
                if data.get(alias, data.get(name)) in (None, ""):
                    raise PydanticCustomError(ErrorCode.INVALID_FIELD.value, f"Missing {alias}")
        return data


class ProjectWeekRequest(DateRangeRequest):
    project_id: int = 0
    task_id: int = 0

    @field_validator("project_id")
    @classmethod
    def validate_project_id(cls, v: int) -> int:
        return check_positive_id(v, ErrorCode.INVALID_PROJECT, "Invalid project id")

    @field_validator("task_id")
    @classmethod
    def validate_task_id(cls, v: int) -> int:
        return check_positive_id(v, ErrorCode.INVALID_TASK, "Invalid task id")


class ProjectDeleteRequest(DateRangeRequest):
    project_id: int = 0
    task_id: int = 0

    @field_validator("project_id", "task_id")
    @classmethod
    def validate_ids(cls, v: int) -> int:
        return check_positive_id(v, ErrorCode.INVALID_FIELD, "Invalid project or task id")

    @model_validator(mode="after")
    def validate_range(self) -> "ProjectDeleteRequest":
        if self.end_date > self.start_date + timedelta(days=MAX_DELETE_DAYS):
            raise PydanticCustomError(
                ErrorCode.INVALID_FIELD.value, "Can only delete 1 week of data"
            )
        return self


class TimeEntryResponse(CamelModel):
    day: date
    hours: float
    project_id: int
    task_id: int
    client_name: str
    project_name: str
    task_name: str

    @classmethod
    def from_row(cls, row: TimeEntryRow) -> "TimeEntryResponse":
        return cls.model_validate(row)


class TimeRangeResponse(CamelModel):
    start: date
    end: date
    entries: list[TimeEntryResponse]

    @classmethod
    def build(cls, start: date, end: date, rows: list[TimeEntryRow]) -> "TimeRangeResponse":
        return cls(start=start, end=end, entries=[TimeEntryResponse.from_row(row) for row in rows])
