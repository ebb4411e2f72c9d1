"""Unit tests for AuthService: login policy, sessions and password recovery.

Repositories are mocked; the database is covered by the integration tests.
"""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.timetrack.core.exceptions import AppError, ErrorCode
from src.timetrack.models import (
    Account,
    AccountStatus,
    AuthorizationRole,
    Profile,
    ProfileAccount,
    ProfileContext,
    ProfileStatus,
    Session,
)
from src.timetrack.models.base import utc_now
from src.timetrack.services.auth_service import AuthService

pytestmark = pytest.mark.unit

MODULE = "src.timetrack.services.auth_service"


def _context(**profile_fields) -> ProfileContext:
    profile = Profile(
        id=7,
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        password="hashed",
        status=ProfileStatus.VALID.value,
    )
    for name, value in profile_fields.items():
        setattr(profile, name, value)
    return ProfileContext(
        profile=profile,
        account=Account(id=3, company="Analytical", status=AccountStatus.VALID.value),
        membership=ProfileAccount(profile_id=7, account_id=3, role=AuthorizationRole.OWNER.value),
    )


@pytest.fixture
def profile_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_context_by_email = AsyncMock()
    repo.get_by_email = AsyncMock()
    repo.get_by_forgot_token = AsyncMock()
    repo.set_locked_until = AsyncMock(return_value=1)
    return repo


@pytest.fixture
def session_repo() -> MagicMock:
    repo = MagicMock()
    repo.upsert = AsyncMock()
    repo.get_context_by_token = AsyncMock()
    repo.extend = AsyncMock(return_value=1)
    repo.delete_by_token = AsyncMock(return_value=1)
    return repo


@pytest.fixture
def membership_repo() -> MagicMock:
    repo = MagicMock()
    repo.touch_last_used = AsyncMock(return_value=1)
    return repo


@pytest.fixture
def login_attempt_repo() -> MagicMock:
    repo = MagicMock()
    repo.flush = AsyncMock()
    repo.count_since = AsyncMock(return_value=1)
    return repo


@pytest.fixture
def service(profile_repo, session_repo, membership_repo, login_attempt_repo, mock_session):
    return AuthService(
        profile_repo=profile_repo,
        session_repo=session_repo,
        membership_repo=membership_repo,
        login_attempt_repo=login_attempt_repo,
        session=mock_session,
    )


class TestLogin:
    async def test_unknown_email(self, service, profile_repo):
        profile_repo.get_context_by_email.return_value = None

        with pytest.raises(AppError) as exc_info:
            await service.login("nobody@example.com", "password123")

        assert exc_info.value.code == ErrorCode.PROFILE_NOT_FOUND
        assert exc_info.value.status_code == 401

    async def test_email_is_lowercased(self, service, profile_repo):
        profile_repo.get_context_by_email.return_value = None

        with pytest.raises(AppError):
            await service.login("Ada@Example.COM", "password123")

        profile_repo.get_context_by_email.assert_awaited_once_with("ada@example.com")

    async def test_locked_profile_is_rejected_before_password_check(
        self, service, profile_repo
    ):
        profile_repo.get_context_by_email.return_value = _context(
            locked_until=utc_now() + timedelta(minutes=10)
        )

        with patch(f"{MODULE}.verify_password") as verify:
            with pytest.raises(AppError) as exc_info:
                await service.login("ada@example.com", "password123")

        assert exc_info.value.code == ErrorCode.PROFILE_LOCKED
        assert exc_info.value.status_code == 401
        verify.assert_not_called()

    async def test_expired_lock_allows_login(self, service, profile_repo, session_repo):
        profile_repo.get_context_by_email.return_value = _context(
            locked_until=utc_now() - timedelta(minutes=1)
        )

        with patch(f"{MODULE}.verify_password", return_value=True):
            context = await service.login("ada@example.com", "password123")

        assert context.token is not None
        session_repo.upsert.assert_awaited_once()

    async def test_not_verified_profile_is_inactive(self, service, profile_repo):
        profile_repo.get_context_by_email.return_value = _context(
            status=ProfileStatus.NOT_VERIFIED.value
        )

        with pytest.raises(AppError) as exc_info:
            await service.login("ada@example.com", "password123")

        assert exc_info.value.code == ErrorCode.PROFILE_INACTIVE
        assert exc_info.value.detail["status"] == "not-verified"

    async def test_incorrect_password_records_attempt(
        self, service, profile_repo, login_attempt_repo, mock_session
    ):
        profile_repo.get_context_by_email.return_value = _context()

        with patch(f"{MODULE}.verify_password", return_value=False):
            with pytest.raises(AppError) as exc_info:
                await service.login("ada@example.com", "wrong-password", "10.0.0.1")

        assert exc_info.value.code == ErrorCode.INCORRECT_PASSWORD
        assert exc_info.value.status_code == 401
        attempt = login_attempt_repo.add.call_args.args[0]
        assert attempt.email == "ada@example.com"
        assert attempt.ip_address == "10.0.0.1"
        profile_repo.set_locked_until.assert_not_awaited()
        mock_session.commit.assert_awaited_once()

    async def test_reaching_threshold_locks_profile(
        self, service, profile_repo, login_attempt_repo, override_settings
    ):
        override_settings(max_failed_login_attempts=3, profile_lock_duration_minutes=30)
        profile_repo.get_context_by_email.return_value = _context()
        login_attempt_repo.count_since.return_value = 3

        with patch(f"{MODULE}.verify_password", return_value=False):
            with pytest.raises(AppError):
                await service.login("ada@example.com", "wrong-password")

        profile_id, until = profile_repo.set_locked_until.call_args.args
        assert profile_id == 7
        assert timedelta(minutes=29) < until - utc_now() <= timedelta(minutes=30)

    async def test_non_positive_lock_duration_uses_five_minutes(
        self, service, profile_repo, login_attempt_repo, override_settings
    ):
        override_settings(max_failed_login_attempts=1, profile_lock_duration_minutes=0)
        profile_repo.get_context_by_email.return_value = _context()

        with patch(f"{MODULE}.verify_password", return_value=False):
            with pytest.raises(AppError):
                await service.login("ada@example.com", "wrong-password")

        _, until = profile_repo.set_locked_until.call_args.args
        assert until - utc_now() <= timedelta(minutes=5)

    async def test_success_opens_session_in_account(
        self, service, profile_repo, session_repo, membership_repo, mock_session
    ):
        profile_repo.get_context_by_email.return_value = _context()

        with patch(f"{MODULE}.verify_password", return_value=True):
            context = await service.login("ada@example.com", "password123")

        token, profile_id, account_id, _ = session_repo.upsert.call_args.args
        assert token == context.token
        assert (profile_id, account_id) == (7, 3)
        membership_repo.touch_last_used.assert_awaited_once_with(7, 3)
        mock_session.commit.assert_awaited_once()


class TestSessions:
    async def test_unknown_token(self, service, session_repo):
        session_repo.get_context_by_token.return_value = None

        with pytest.raises(AppError) as exc_info:
            await service.get_context("missing")

        assert exc_info.value.code == ErrorCode.PROFILE_NOT_FOUND
        assert exc_info.value.status_code == 401

    async def test_expired_session(self, service):
        context = _context()
        context.session = Session(
            token="t", profile_id=7, account_id=3, expiration=utc_now() - timedelta(seconds=1)
        )

        with pytest.raises(AppError) as exc_info:
            await service.validate_session(context)

        assert exc_info.value.code == ErrorCode.TOKEN_EXPIRED

    async def test_fresh_session_is_not_extended(self, service, session_repo, override_settings):
        override_settings(cookie_expiration_minutes=60)
        context = _context()
        context.session = Session(
            token="t", profile_id=7, account_id=3, expiration=utc_now() + timedelta(minutes=50)
        )

        await service.validate_session(context)

        session_repo.extend.assert_not_awaited()

    async def test_ageing_session_slides_to_full_lifetime(
        self, service, session_repo, override_settings
    ):
        override_settings(cookie_expiration_minutes=60)
        context = _context()
        context.session = Session(
            token="t", profile_id=7, account_id=3, expiration=utc_now() + timedelta(minutes=10)
        )

        await service.validate_session(context)

        session_repo.extend.assert_awaited_once()
        assert context.session.expiration - utc_now() > timedelta(minutes=59)

    async def test_logout_deletes_session(self, service, session_repo, mock_session):
        await service.logout("token-value")

        session_repo.delete_by_token.assert_awaited_once_with("token-value")
        mock_session.commit.assert_awaited_once()


class TestForgotPassword:
    async def test_stores_token_and_sends_email(self, service, profile_repo, mock_session):
        profile = _context().profile
        profile_repo.get_by_email.return_value = profile

        with patch(f"{MODULE}.send_forgot_password_email", return_value=True) as send:
            await service.forgot_password("ADA@example.com")

        assert profile.forgot_password_token
        assert profile.forgot_password_expiration > utc_now()
        mock_session.commit.assert_awaited_once()
        to, name, url = send.call_args.args
        assert (to, name) == ("ada@example.com", "Ada")
        assert url.endswith(f"verify-token={profile.forgot_password_token}")

    async def test_unknown_email(self, service, profile_repo):
        profile_repo.get_by_email.return_value = None

        with pytest.raises(AppError) as exc_info:
            await service.forgot_password("nobody@example.com")

        assert exc_info.value.code == ErrorCode.PROFILE_NOT_FOUND

    async def test_email_failure_is_system_error(self, service, profile_repo):
        profile_repo.get_by_email.return_value = _context().profile

        with patch(f"{MODULE}.send_forgot_password_email", return_value=False):
            with pytest.raises(AppError) as exc_info:
                await service.forgot_password("ada@example.com")

        assert exc_info.value.code == ErrorCode.SYSTEM_ERROR

    async def test_token_is_single_use(self, service, profile_repo, override_settings):
        override_settings(clear_forgot_password_on_validate=True)
        profile = _context(
            forgot_password_token="reset",
            forgot_password_expiration=utc_now() + timedelta(minutes=30),
        ).profile
        profile_repo.get_by_forgot_token.side_effect = lambda token: (
            profile if profile.forgot_password_token == token else None
        )

        await service.validate_forgot_password_token("reset")

        assert profile.forgot_password_token is None
        assert profile.forgot_password_expiration is None

        with pytest.raises(AppError) as exc_info:
            await service.validate_forgot_password_token("reset")

        assert exc_info.value.code == ErrorCode.INVALID_FORGOT_TOKEN

    async def test_expired_token(self, service, profile_repo):
        profile_repo.get_by_forgot_token.return_value = _context(
            forgot_password_token="reset",
            forgot_password_expiration=utc_now() - timedelta(minutes=1),
        ).profile

        with pytest.raises(AppError) as exc_info:
            await service.validate_forgot_password_token("reset")

        assert exc_info.value.code == ErrorCode.INVALID_FORGOT_TOKEN

    async def test_setup_new_user_activates_profile(self, service, profile_repo):
        profile = _context(
            status=ProfileStatus.NOT_VERIFIED.value,
            forgot_password_token="invite",
            forgot_password_expiration=utc_now() + timedelta(days=1),
        ).profile
        profile_repo.get_by_forgot_token.return_value = profile

        with patch(f"{MODULE}.hash_password", return_value="new-hash"):
            await service.setup_new_user("invite", "new-password")

        assert profile.status == ProfileStatus.VALID.value
        assert profile.password == "new-hash"
        assert profile.forgot_password_token is None

    async def test_setup_new_user_requires_token(self, service, profile_repo):
        with pytest.raises(AppError) as exc_info:
            await service.setup_new_user("", "new-password")

        assert exc_info.value.code == ErrorCode.INVALID_TOKEN
        profile_repo.get_by_forgot_token.assert_not_awaited()
