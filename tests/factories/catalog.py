"""Client, project and task factories."""

from polyfactory import Use

from src.timetrack.models import Client, Project, ProjectTask, Task
from tests.factories.base import BaseFactory, unique_suffix


class ClientFactory(BaseFactory):
    __model__ = Client

    id = None
    account_id = None
    name = Use(lambda: f"Client {unique_suffix()}")
    address = None
    active = True


class ProjectFactory(BaseFactory):
    __model__ = Project

    id = None
    account_id = None
    client_id = None
    name = Use(lambda: f"Project {unique_suffix()}")
    code = None
    active = True


class TaskFactory(BaseFactory):
    __model__ = Task

    id = None
    account_id = None
    name = Use(lambda: f"Task {unique_suffix()}")
    default_rate = 100.0
    default_billable = True
    common = False
    active = True


class ProjectTaskFactory(BaseFactory):
    __model__ = ProjectTask

    project_id = None
    task_id = None
    account_id = None
    rate = 100.0
    billable = True
    active = True
