"""Account, profile and membership models."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.timetrack.models.base import utc_now
from src.timetrack.models.enums import (
    AccountStatus,
    AuthorizationRole,
    ProfileAccountStatus,
    ProfileStatus,
)


class Account(SQLModel, table=True):
    """A company. Every tenant-scoped row carries its ``account_id``."""

    __tablename__ = "accounts"

    id: int | None = Field(default=None, primary_key=True)
    company: str = Field(max_length=64)
    status: str = Field(default=AccountStatus.NEW.value, max_length=20)
    week_start: int = Field(default=1)
    timezone: str = Field(default="America/New_York", max_length=64)
    close_reason: str | None = Field(default=None, max_length=1024)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Profile(SQLModel, table=True):
    """A person who logs in. Email is stored lower-case."""

    __tablename__ = "profiles"

    id: int | None = Field(default=None, primary_key=True)
    first_name: str = Field(max_length=64)
    last_name: str = Field(max_length=64)
    email: str = Field(max_length=254, unique=True, index=True)
    password: str = Field(max_length=255)
    phone: str | None = Field(default=None, max_length=32)
    status: str = Field(default=ProfileStatus.NEW.value, max_length=20)
    locked_until: datetime | None = Field(default=None)
    timezone: str | None = Field(default=None, max_length=64)
    forgot_password_token: str | None = Field(default=None, max_length=512, index=True)
    forgot_password_expiration: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ProfileAccount(SQLModel, table=True):
    """Membership of a profile in an account, with its role."""

    __tablename__ = "profile_accounts"

    profile_id: int = Field(foreign_key="profiles.id", primary_key=True)
    account_id: int = Field(foreign_key="accounts.id", primary_key=True)
    role: str = Field(default=AuthorizationRole.USER.value, max_length=20)
    status: str = Field(default=ProfileAccountStatus.VALID.value, max_length=20)
    last_used: datetime = Field(default_factory=utc_now)
    created_at: datetime = Field(default_factory=utc_now)
