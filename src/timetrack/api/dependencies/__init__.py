"""FastAPI dependency injection definitions."""

from src.timetrack.api.dependencies.auth import (
    ActiveAccountAdmin,
    AdminProfile,
    CurrentProfile,
    RequestToken,
    clear_session_cookie,
    extract_token,
    get_current_profile,
    get_request_token,
    require_active_account,
    require_admin,
    set_session_cookie,
)
from src.timetrack.api.dependencies.db import DBSession, get_db_session
from src.timetrack.api.dependencies.services import (
    AccountServiceDep,
    AuthServiceDep,
    ClientServiceDep,
    ProfileServiceDep,
    ProjectServiceDep,
    ReportServiceDep,
    TaskServiceDep,
    TimeServiceDep,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "ActiveAccountAdmin",
    "AdminProfile",
    "CurrentProfile",
    "RequestToken",
    "clear_session_cookie",
    "extract_token",
    "get_current_profile",
    "get_request_token",
    "require_active_account",
    "require_admin",
    "set_session_cookie",
    # Services
    "AccountServiceDep",
    "AuthServiceDep",
    "ClientServiceDep",
    "ProfileServiceDep",
    "ProjectServiceDep",
    "ReportServiceDep",
    "TaskServiceDep",
    "TimeServiceDep",
]
