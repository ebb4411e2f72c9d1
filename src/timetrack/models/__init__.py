"""Model exports.

Import from here: `from src.timetrack.models import Profile, TimeEntry`
"""

from src.timetrack.models.account import Account, Profile, ProfileAccount
from src.timetrack.models.auth import LoginAttempt, Session
from src.timetrack.models.catalog import Client, Project, ProjectTask, Task
from src.timetrack.models.context import ProfileContext
from src.timetrack.models.enums import (
    AccountStatus,
    AuthorizationRole,
    ProfileAccountStatus,
    ProfileStatus,
    SessionType,
)
from src.timetrack.models.time_entry import MAX_HOURS, TimeEntry

__all__ = [
    # Enums
    "AccountStatus",
    "AuthorizationRole",
    "ProfileAccountStatus",
    "ProfileStatus",
    "SessionType",
    # Account
    "Account",
    "Profile",
    "ProfileAccount",
    "ProfileContext",
    # Auth
    "LoginAttempt",
    "Session",
    # Catalog
    "Client",
    "Project",
    "ProjectTask",
    "Task",
    # Time
    "MAX_HOURS",
    "TimeEntry",
]
