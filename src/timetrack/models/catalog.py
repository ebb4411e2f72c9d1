"""Client, project and task models."""

from sqlmodel import Field, SQLModel


class Client(SQLModel, table=True):
    __tablename__ = "clients"

    id: int | None = Field(default=None, primary_key=True)
    account_id: int = Field(foreign_key="accounts.id", index=True)
    name: str = Field(max_length=64)
    address: str | None = Field(default=None, max_length=1024)
    active: bool = Field(default=True)


class Project(SQLModel, table=True):
    __tablename__ = "projects"

    id: int | None = Field(default=None, primary_key=True)
    account_id: int = Field(foreign_key="accounts.id", index=True)
    client_id: int = Field(foreign_key="clients.id", ondelete="CASCADE", index=True)
    name: str = Field(max_length=128)
    code: str | None = Field(default=None, max_length=64)
    active: bool = Field(default=True)


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: int | None = Field(default=None, primary_key=True)
    account_id: int = Field(foreign_key="accounts.id", index=True)
    name: str = Field(max_length=128)
    default_rate: float | None = Field(default=None)
    default_billable: bool = Field(default=False)
    common: bool = Field(default=False)
    active: bool = Field(default=True)


class ProjectTask(SQLModel, table=True):
    """Billing terms of a task on a project."""

    __tablename__ = "project_tasks"

    project_id: int = Field(foreign_key="projects.id", ondelete="CASCADE", primary_key=True)
    task_id: int = Field(foreign_key="tasks.id", ondelete="CASCADE", primary_key=True)
    account_id: int = Field(foreign_key="accounts.id", index=True)
    rate: float | None = Field(default=None)
    billable: bool = Field(default=False)
    active: bool = Field(default=True)
