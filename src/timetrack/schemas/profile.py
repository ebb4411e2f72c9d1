from pydantic import field_validator

from src.timetrack.core.validators import (
    NAME_MAX,
    NAME_MIN,
    check_email,
    check_length,
    check_password,
    check_timezone,
)
from src.timetrack.schemas.base import CamelModel


class ProfileUpdateRequest(CamelModel):
    """Partial update: omitted or empty fields are left unchanged."""

    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    timezone: str | None = None
    phone: str | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return check_email(v) if v else None

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, v: str | None) -> str | None:
        return check_length(v, NAME_MIN, NAME_MAX, "First name") if v else None

    @field_validator("last_name")
    @classmethod
    def validate_last_name(cls, v: str | None) -> str | None:
        return check_length(v, NAME_MIN, NAME_MAX, "Last name") if v else None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        return check_timezone(v) if v else None


class PasswordUpdateRequest(CamelModel):
    current_password: str
    password: str
    confirm_password: str

    @field_validator("current_password", "password", "confirm_password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password(v)
