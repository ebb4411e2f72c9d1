"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.timetrack.api.dependencies.db import DBSession
from src.timetrack.repositories import (
    AccountRepository,
    ClientRepository,
    LoginAttemptRepository,
    MembershipRepository,
    ProfileRepository,
    ProjectRepository,
    ReportRepository,
    SessionRepository,
    TaskRepository,
    TimeEntryRepository,
)


def get_profile_repository(session: DBSession) -> ProfileRepository:
    return ProfileRepository(session)


def get_account_repository(session: DBSession) -> AccountRepository:
    return AccountRepository(session)


def get_membership_repository(session: DBSession) -> MembershipRepository:
    return MembershipRepository(session)


def get_session_repository(session: DBSession) -> SessionRepository:
    return SessionRepository(session)


def get_login_attempt_repository(session: DBSession) -> LoginAttemptRepository:
    return LoginAttemptRepository(session)


def get_client_repository(session: DBSession) -> ClientRepository:
    return ClientRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_task_repository(session: DBSession) -> TaskRepository:
    return TaskRepository(session)


def get_time_entry_repository(session: DBSession) -> TimeEntryRepository:
    return TimeEntryRepository(session)


def get_report_repository(session: DBSession) -> ReportRepository:
    return ReportRepository(session)


ProfileRepo = Annotated[ProfileRepository, Depends(get_profile_repository)]
AccountRepo = Annotated[AccountRepository, Depends(get_account_repository)]
MembershipRepo = Annotated[MembershipRepository, Depends(get_membership_repository)]
SessionRepo = Annotated[SessionRepository, Depends(get_session_repository)]
LoginAttemptRepo = Annotated[LoginAttemptRepository, Depends(get_login_attempt_repository)]
ClientRepo = Annotated[ClientRepository, Depends(get_client_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
TaskRepo = Annotated[TaskRepository, Depends(get_task_repository)]
TimeEntryRepo = Annotated[TimeEntryRepository, Depends(get_time_entry_repository)]
ReportRepo = Annotated[ReportRepository, Depends(get_report_repository)]
