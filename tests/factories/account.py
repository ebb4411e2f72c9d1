"""Account, profile and membership factories for test data generation."""

from polyfactory import Use

from src.timetrack.core.security import hash_password
from src.timetrack.models import (
    Account,
    AccountStatus,
    AuthorizationRole,
    Profile,
    ProfileAccount,
    ProfileAccountStatus,
    ProfileStatus,
)
from tests.factories.base import BaseFactory, unique_suffix, utc_now

# Default test password - stored for convenience in tests
DEFAULT_TEST_PASSWORD = "testpassword123"


class AccountFactory(BaseFactory):
    __model__ = Account

    id = None
    company = Use(lambda: f"Company {unique_suffix()}")
    status = AccountStatus.VALID.value
    week_start = 1
    timezone = "America/New_York"
    close_reason = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def archived(cls, **kwargs):
        return cls.build(status=AccountStatus.ARCHIVED.value, **kwargs)


class ProfileFactory(BaseFactory):
    __model__ = Profile

    id = None
    first_name = "Test"
    last_name = "User"
    email = Use(lambda: f"user_{unique_suffix()}@example.com")
    password = Use(lambda: hash_password(DEFAULT_TEST_PASSWORD))
    phone = None
    status = ProfileStatus.VALID.value
    locked_until = None
    timezone = "America/New_York"
    forgot_password_token = None
    forgot_password_expiration = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def not_verified(cls, **kwargs):
        """An invited profile that has not completed setup."""
        return cls.build(status=ProfileStatus.NOT_VERIFIED.value, **kwargs)


class ProfileAccountFactory(BaseFactory):
    __model__ = ProfileAccount

    # FK fields - must be set explicitly
    profile_id = None
    account_id = None
    role = AuthorizationRole.OWNER.value
    status = ProfileAccountStatus.VALID.value
    last_used = Use(utc_now)
    created_at = Use(utc_now)

    @classmethod
    def user(cls, **kwargs):
        return cls.build(role=AuthorizationRole.USER.value, **kwargs)
