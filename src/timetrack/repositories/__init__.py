"""Repository layer - data access abstraction."""

from src.timetrack.repositories.account import AccountRepository, MembershipRepository
from src.timetrack.repositories.base import AccountScopedRepository, BaseRepository
from src.timetrack.repositories.client import ClientRepository
from src.timetrack.repositories.login_attempt import LoginAttemptRepository
from src.timetrack.repositories.profile import ProfileRepository
from src.timetrack.repositories.project import ProjectDetail, ProjectRepository, ProjectTaskDetail
from src.timetrack.repositories.report import ReportRepository
from src.timetrack.repositories.session import SessionRepository
from src.timetrack.repositories.task import TaskRepository
from src.timetrack.repositories.time_entry import TimeEntryRepository, TimeEntryRow

__all__ = [
    # Base
    "AccountScopedRepository",
    "BaseRepository",
    # Account and auth
    "AccountRepository",
    "LoginAttemptRepository",
    "MembershipRepository",
    "ProfileRepository",
    "SessionRepository",
    # Catalog
    "ClientRepository",
    "ProjectDetail",
    "ProjectRepository",
    "ProjectTaskDetail",
    "TaskRepository",
    # Time and reports
    "ReportRepository",
    "TimeEntryRepository",
    "TimeEntryRow",
]
