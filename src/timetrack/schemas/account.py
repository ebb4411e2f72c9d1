from datetime import UTC, datetime

from pydantic import field_validator
from pydantic_core import PydanticCustomError

from src.timetrack.core.exceptions import ErrorCode
from src.timetrack.core.validators import (
    COMPANY_MAX,
    COMPANY_MIN,
    NAME_MAX,
    NAME_MIN,
    check_email,
    check_length,
    check_password,
    check_timezone,
)
from src.timetrack.models import Account, Profile
from src.timetrack.models.enums import is_week_start
from src.timetrack.schemas.base import CamelModel


class AccountCreateRequest(CamelModel):
    email: str
    password: str
    first_name: str
    last_name: str
    company: str
    timezone: str | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password(v)

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, v: str) -> str:
        return check_length(v, NAME_MIN, NAME_MAX, "First name")

    @field_validator("last_name")
    @classmethod
    def validate_last_name(cls, v: str) -> str:
        return check_length(v, NAME_MIN, NAME_MAX, "Last name")

    @field_validator("company")
    @classmethod
    def validate_company(cls, v: str) -> str:
        return check_length(v, COMPANY_MIN, COMPANY_MAX, "Company")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        return check_timezone(v) if v else None


class AccountUpdateRequest(CamelModel):
    company: str
    week_start: int = -1
    timezone: str | None = None

    @field_validator("company")
    @classmethod
    def validate_company(cls, v: str) -> str:
        return check_length(v, COMPANY_MIN, COMPANY_MAX, "Company")

    @field_validator("week_start")
    @classmethod
    def validate_week_start(cls, v: int) -> int:
        if v != -1 and not is_week_start(v):
            raise PydanticCustomError(
                ErrorCode.INVALID_WEEK_START.value,
                "Week start must be between 0 (Sunday) and 6 (Saturday)",
            )
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        return check_timezone(v) if v else None


class AccountResponse(CamelModel):
    company: str
    week_start: int
    timezone: str
    created: datetime
    updated: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(
            company=account.company,
            week_start=account.week_start,
            timezone=account.timezone,
            created=account.created_at.replace(tzinfo=UTC),
            updated=account.updated_at.replace(tzinfo=UTC),
        )


class CloseAccountRequest(CamelModel):
    reason: str | None = None


class AddUserRequest(CamelModel):
    email: str
    first_name: str
    last_name: str
    role: str | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return check_email(v)

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, v: str) -> str:
        return check_length(v, NAME_MIN, NAME_MAX, "First name")

    @field_validator("last_name")
    @classmethod
    def validate_last_name(cls, v: str) -> str:
        return check_length(v, NAME_MIN, NAME_MAX, "Last name")


class RemoveUserRequest(CamelModel):
    email: str | None = None


class ProfileResponse(CamelModel):
    first_name: str
    last_name: str
    company: str | None = None
    email: str
    phone: str | None = None
    timezone: str | None = None

    @classmethod
    def from_profile(cls, profile: Profile, company: str | None = None) -> "ProfileResponse":
        return cls(
            first_name=profile.first_name,
            last_name=profile.last_name,
            company=company,
            email=profile.email,
            phone=profile.phone,
            timezone=profile.timezone,
        )


class ProfileSummary(CamelModel):
    """A member of the account as listed to its admins."""

    id: int
    first_name: str
    last_name: str
    email: str
