"""Shared enums for models."""

from enum import Enum


class AccountStatus(str, Enum):
    """Account lifecycle status. Accounts are archived, never deleted."""

    NEW = "new"
    VALID = "valid"
    ARCHIVED = "archived"
    SUSPENDED = "suspended"


class ProfileStatus(str, Enum):
    """Profile status. ``new`` and ``not-verified`` move to ``valid`` only."""

    NEW = "new"
    NOT_VERIFIED = "not-verified"
    VALID = "valid"


class ProfileAccountStatus(str, Enum):
    VALID = "valid"
    INVALID = "invalid"


class AuthorizationRole(str, Enum):
    """Role of a profile within an account."""

    OWNER = "owner"
    ADMIN = "admin"
    REPORTING = "reporting"
    USER = "user"


class SessionType(str, Enum):
    WEB = "web"


def is_profile_status_valid(status: str | None) -> bool:
    return status in (ProfileStatus.NEW.value, ProfileStatus.VALID.value)


def is_account_status_valid(status: str | None) -> bool:
    return status in (AccountStatus.NEW.value, AccountStatus.VALID.value)


def is_admin(role: str | None) -> bool:
    return role in (AuthorizationRole.ADMIN.value, AuthorizationRole.OWNER.value)


def is_role(role: str | None) -> bool:
    return role in {r.value for r in AuthorizationRole}


def is_week_start(week_start: int) -> bool:
    """0 is Sunday, 6 is Saturday."""
    return 0 <= week_start <= 6
