from pydantic import Field, field_validator

from src.timetrack.core.validators import check_email, check_password
from src.timetrack.schemas.base import CamelModel


class LoginRequest(CamelModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password(v)


class AuthResponse(CamelModel):
    """Who the session belongs to."""

    id: int
    first_name: str
    last_name: str
    company: str
    week_start: int


class ForgotPasswordRequest(CamelModel):
    email: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return check_email(v)


class ForgotPasswordValidateRequest(CamelModel):
    forgot_password_token: str | None = None


class SetupUserRequest(CamelModel):
    token: str | None = None
    password: str = Field(description="New password, 8 to 64 characters")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password(v)
