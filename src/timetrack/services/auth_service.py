"""Authentication service - login, sessions and the forgot-password flow."""

from datetime import timedelta

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.timetrack.core.config import get_settings
from src.timetrack.core.exceptions import AppError, ErrorCode
from src.timetrack.core.logging import get_logger
from src.timetrack.core.notifications import send_forgot_password_email
from src.timetrack.core.security import (
    generate_forgot_password_token,
    generate_session_token,
    hash_password,
    session_expiration,
    verify_password,
)
from src.timetrack.models import LoginAttempt, ProfileContext, ProfileStatus, Session
from src.timetrack.models.base import utc_now
from src.timetrack.models.enums import is_profile_status_valid
from src.timetrack.repositories import (
    LoginAttemptRepository,
    MembershipRepository,
    ProfileRepository,
    SessionRepository,
)
from src.timetrack.services.base import BaseService

logger = get_logger(__name__)

DEFAULT_IP_ADDRESS = "0.0.0.0"
DEFAULT_LOCK_MINUTES = 5


class AuthService(BaseService):
    """Login, logout, session validation and password recovery.

    Login failures are reported as 401 whatever their code.
    """

    def __init__(
        self,
        profile_repo: ProfileRepository,
        session_repo: SessionRepository,
        membership_repo: MembershipRepository,
        login_attempt_repo: LoginAttemptRepository,
        session: AsyncSession,
    ):
        super().__init__(session)
        self.profile_repo = profile_repo
        self.session_repo = session_repo
        self.membership_repo = membership_repo
        self.login_attempt_repo = login_attempt_repo

    async def login(
        self, email: str, password: str, ip_address: str | None = None
    ) -> ProfileContext:
        """Check credentials and open a session in the most recently used account."""
        email = email.lower()

        async with self.storage_errors("Failed to load profile"):
            context = await self.profile_repo.get_context_by_email(email)

        if context is None:
            raise AppError(
                ErrorCode.PROFILE_NOT_FOUND,
                "No profile found",
                field="email",
                status_code=status.HTTP_401_UNAUTHORIZED,
            )

        profile = context.profile
        now = utc_now()
        if profile.locked_until is not None and profile.locked_until > now:
            raise AppError(
                ErrorCode.PROFILE_LOCKED,
                "Profile is locked",
                detail={"until": profile.locked_until.isoformat()},
            )

        if not is_profile_status_valid(profile.status):
            raise AppError(
                ErrorCode.PROFILE_INACTIVE,
                "Profile is not active",
                detail={"status": profile.status},
            )

        if not verify_password(password, profile.password):
            await self._record_failed_login(context, ip_address or DEFAULT_IP_ADDRESS)
            raise AppError(ErrorCode.INCORRECT_PASSWORD, "Incorrect password", field="password")

        token = generate_session_token()
        expiration = session_expiration(now)
        async with self.storage_errors("Failed to create session"):
            await self.session_repo.upsert(token, context.profile_id, context.account_id, expiration)
            await self.membership_repo.touch_last_used(context.profile_id, context.account_id)
            await self.session.commit()

        context.session = Session(
            token=token,
            profile_id=context.profile_id,
            account_id=context.account_id,
            expiration=expiration,
        )
        logger.info("Login succeeded", profile_id=context.profile_id, account_id=context.account_id)
        return context

    async def _record_failed_login(self, context: ProfileContext, ip_address: str) -> None:
        """Store the attempt and lock the profile once the threshold is reached.

        Failures here are logged only; the caller still reports the bad password.
        """
        settings = get_settings()
        email = context.profile.email
        now = utc_now()
        try:
            self.login_attempt_repo.add(
                LoginAttempt(email=email, ip_address=ip_address, attempted_at=now)
            )
            await self.login_attempt_repo.flush()

            since = now - timedelta(minutes=settings.login_failure_window_minutes)
            attempts = await self.login_attempt_repo.count_since(email, since)
            if attempts >= settings.max_failed_login_attempts:
                lock_minutes = settings.profile_lock_duration_minutes
                if lock_minutes <= 0:
                    lock_minutes = DEFAULT_LOCK_MINUTES
                await self.profile_repo.set_locked_until(
                    context.profile_id, now + timedelta(minutes=lock_minutes)
                )
                logger.warning("Profile locked", profile_id=context.profile_id, attempts=attempts)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Failed to record login attempt", error=str(exc))

    async def logout(self, token: str) -> None:
        async with self.storage_errors("Failed to remove session"):
            deleted = await self.session_repo.delete_by_token(token)
            await self.session.commit()
        if deleted == 0:
            logger.warning("Logout for unknown session")

    async def get_context(self, token: str) -> ProfileContext:
        """Resolve a session token to the profile acting through it."""
        async with self.storage_errors("Failed to load session"):
            context = await self.session_repo.get_context_by_token(token)

        if context is None:
            raise AppError(
                ErrorCode.PROFILE_NOT_FOUND,
                "No profile found for token",
                status_code=status.HTTP_401_UNAUTHORIZED,
            )

        if not is_profile_status_valid(context.profile.status):
            raise AppError(
                ErrorCode.PROFILE_INACTIVE,
                "Profile is not active",
                detail={"status": context.profile.status},
            )
        return context

    async def validate_session(self, context: ProfileContext) -> None:
        """Reject expired sessions and slide the expiration of ageing ones.

        A session with less than half the cookie lifetime left is extended to
        a full lifetime. Failing to extend is logged and the request proceeds.
        """
        session = context.session
        now = utc_now()
        if session is None or session.expiration is None or session.expiration <= now:
            raise AppError(ErrorCode.TOKEN_EXPIRED, "Session expired")

        lifetime = timedelta(minutes=get_settings().cookie_expiration_minutes)
        if session.expiration - now >= lifetime / 2:
            return

        new_expiration = now + lifetime
        try:
            await self.session_repo.extend(session.token, new_expiration)
            await self.session.commit()
            session.expiration = new_expiration
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Failed to extend session", error=str(exc))

    async def forgot_password(self, email: str) -> None:
        """Store a reset token and email the reset link.

        The token stays stored when the email cannot be sent.
        """
        settings = get_settings()
        async with self.storage_errors("Failed to store forgot password token"):
            profile = await self.profile_repo.get_by_email(email.lower())
            if profile is None:
                raise AppError(ErrorCode.PROFILE_NOT_FOUND, "No profile found", field="email")

            token = generate_forgot_password_token()
            profile.forgot_password_token = token
            profile.forgot_password_expiration = utc_now() + timedelta(
                minutes=settings.forgot_password_expiration_minutes
            )
            profile.updated_at = utc_now()
            await self.session.commit()

        reset_url = f"{settings.app_url}/reset-password?verify-token={token}"
        if not send_forgot_password_email(profile.email, profile.first_name, reset_url):
            raise AppError(ErrorCode.SYSTEM_ERROR, "Failed to send forgot password email")

    async def validate_forgot_password_token(self, token: str) -> None:
        """Accept a reset token once; it is cleared when clear-on-validate is set."""
        if not token:
            raise AppError(ErrorCode.INVALID_FORGOT_TOKEN, "Missing forgot password token")

        async with self.storage_errors("Failed to validate forgot password token"):
            profile = await self.profile_repo.get_by_forgot_token(token)
            if (
                profile is None
                or profile.forgot_password_expiration is None
                or profile.forgot_password_expiration <= utc_now()
            ):
                raise AppError(ErrorCode.INVALID_FORGOT_TOKEN, "Invalid forgot password token")

            if get_settings().clear_forgot_password_on_validate:
                profile.forgot_password_token = None
                profile.forgot_password_expiration = None
                profile.updated_at = utc_now()
                await self.session.commit()

    async def setup_new_user(self, token: str, password: str) -> None:
        """Set the first password of an invited profile and activate it."""
        if not token:
            raise AppError(ErrorCode.INVALID_TOKEN, "Missing token")

        async with self.storage_errors("Failed to set up new user"):
            profile = await self.profile_repo.get_by_forgot_token(token)
            if profile is None:
                raise AppError(ErrorCode.INVALID_TOKEN, "Invalid token")
            if (
                profile.forgot_password_expiration is None
                or profile.forgot_password_expiration <= utc_now()
            ):
                raise AppError(ErrorCode.TOKEN_EXPIRED, "Token expired")

            profile.forgot_password_token = None
            profile.forgot_password_expiration = None
            profile.password = hash_password(password)
            profile.status = ProfileStatus.VALID.value
            profile.updated_at = utc_now()
            await self.session.commit()
