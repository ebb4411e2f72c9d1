"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.timetrack.api.dependencies.db import DBSession
from src.timetrack.api.dependencies.repositories import (
    AccountRepo,
    ClientRepo,
    LoginAttemptRepo,
    MembershipRepo,
    ProfileRepo,
    ProjectRepo,
    ReportRepo,
    SessionRepo,
    TaskRepo,
    TimeEntryRepo,
)
from src.timetrack.services import (
    AccountService,
    AuthService,
    ClientService,
    ProfileService,
    ProjectService,
    ReportService,
    TaskService,
    TimeService,
)


def get_auth_service(
    profile_repo: ProfileRepo,
    session_repo: SessionRepo,
    membership_repo: MembershipRepo,
    login_attempt_repo: LoginAttemptRepo,
    session: DBSession,
) -> AuthService:
    return AuthService(profile_repo, session_repo, membership_repo, login_attempt_repo, session)


def get_account_service(
    profile_repo: ProfileRepo,
    account_repo: AccountRepo,
    membership_repo: MembershipRepo,
    session_repo: SessionRepo,
    session: DBSession,
) -> AccountService:
    return AccountService(profile_repo, account_repo, membership_repo, session_repo, session)


def get_profile_service(profile_repo: ProfileRepo, session: DBSession) -> ProfileService:
    return ProfileService(profile_repo, session)


def get_client_service(client_repo: ClientRepo, session: DBSession) -> ClientService:
    return ClientService(client_repo, session)


def get_project_service(
    project_repo: ProjectRepo,
    client_repo: ClientRepo,
    task_repo: TaskRepo,
    session: DBSession,
) -> ProjectService:
    return ProjectService(project_repo, client_repo, task_repo, session)


def get_task_service(task_repo: TaskRepo, session: DBSession) -> TaskService:
    return TaskService(task_repo, session)


def get_time_service(
    time_repo: TimeEntryRepo,
    project_repo: ProjectRepo,
    task_repo: TaskRepo,
    session: DBSession,
) -> TimeService:
    return TimeService(time_repo, project_repo, task_repo, session)


def get_report_service(report_repo: ReportRepo, session: DBSession) -> ReportService:
    return ReportService(report_repo, session)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
ClientServiceDep = Annotated[ClientService, Depends(get_client_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
TimeServiceDep = Annotated[TimeService, Depends(get_time_service)]
ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]
