from src.timetrack.services.account_service import AccountService
from src.timetrack.services.auth_service import AuthService
from src.timetrack.services.client_service import ClientService
from src.timetrack.services.profile_service import ProfileService
from src.timetrack.services.project_service import ProjectService
from src.timetrack.services.report_service import ReportService
from src.timetrack.services.task_service import TaskService
from src.timetrack.services.time_service import TimeService

__all__ = [
    "AccountService",
    "AuthService",
    "ClientService",
    "ProfileService",
    "ProjectService",
    "ReportService",
    "TaskService",
    "TimeService",
]
