"""Session and login attempt models."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.timetrack.models.base import utc_now
from src.timetrack.models.enums import SessionType


class Session(SQLModel, table=True):
    """Opaque login token bound to a profile acting in one account."""

    __tablename__ = "sessions"

    id: int | None = Field(default=None, primary_key=True)
    token: str = Field(max_length=255, unique=True, index=True)
    profile_id: int = Field(foreign_key="profiles.id", index=True)
    account_id: int = Field(foreign_key="accounts.id", index=True)
    expiration: datetime
    type: str = Field(default=SessionType.WEB.value, max_length=20)
    created_at: datetime = Field(default_factory=utc_now)


class LoginAttempt(SQLModel, table=True):
    """One failed password check, counted for lockout."""

    __tablename__ = "login_attempts"

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(max_length=254, index=True)
    ip_address: str = Field(default="0.0.0.0", max_length=64)
    attempted_at: datetime = Field(default_factory=utc_now, index=True)
