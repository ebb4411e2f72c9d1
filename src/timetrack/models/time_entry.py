"""Hours logged by a profile against a project/task on one day."""

from datetime import date

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

MAX_HOURS = 9999.0


class TimeEntry(SQLModel, table=True):
    __tablename__ = "time_entries"
    __table_args__ = (
        UniqueConstraint(
            "account_id",
            "profile_id",
            "project_id",
            "task_id",
            "day",
            name="uq_time_entries_account_profile_project_task_day",
        ),
    )

    id: int | None = Field(default=None, primary_key=True)
    account_id: int = Field(foreign_key="accounts.id", index=True)
    profile_id: int = Field(foreign_key="profiles.id", index=True)
    project_id: int = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    task_id: int = Field(foreign_key="tasks.id", ondelete="CASCADE", index=True)
    day: date = Field(index=True)
    hours: float = Field(default=0.0)
