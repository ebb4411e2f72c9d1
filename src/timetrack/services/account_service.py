"""Account service - account lifecycle and account membership."""

from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from src.timetrack.core.config import get_settings
from src.timetrack.core.exceptions import AppError, ErrorCode
from src.timetrack.core.logging import get_logger
from src.timetrack.core.notifications import send_new_user_email
from src.timetrack.core.security import (
    generate_forgot_password_token,
    generate_session_token,
    generate_token,
    hash_password,
    session_expiration,
    verify_password,
)
from src.timetrack.models import (
    Account,
    AccountStatus,
    AuthorizationRole,
    Profile,
    ProfileAccount,
    ProfileAccountStatus,
    ProfileContext,
    ProfileStatus,
    Session,
)
from src.timetrack.models.base import persisted_id, utc_now
from src.timetrack.models.enums import is_role
from src.timetrack.repositories import (
    AccountRepository,
    MembershipRepository,
    ProfileRepository,
    SessionRepository,
)
from src.timetrack.services.base import BaseService

logger = get_logger(__name__)


class AccountService(BaseService):
    def __init__(
        self,
        profile_repo: ProfileRepository,
        account_repo: AccountRepository,
        membership_repo: MembershipRepository,
        session_repo: SessionRepository,
        session: AsyncSession,
    ):
        super().__init__(session)
        self.profile_repo = profile_repo
        self.account_repo = account_repo
        self.membership_repo = membership_repo
        self.session_repo = session_repo

    async def create_account(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        company: str,
        timezone: str | None = None,
    ) -> ProfileContext:
        """Create an account owned by the caller and log them in to it.

        An existing profile with the same email becomes the owner, provided
        the password matches it.
        """
        email = email.lower()
        timezone = timezone or get_settings().default_timezone

        async with self.storage_errors("Failed to create account", ErrorCode.ACCOUNT_CREATE_FAILED):
            profile = await self.profile_repo.get_by_email(email)
            if profile is not None and not verify_password(password, profile.password):
                raise AppError(
                    ErrorCode.ACCOUNT_EXISTS, "Profile exists for email", field="email"
                )

            account = Account(
                company=company,
                status=AccountStatus.VALID.value,
                timezone=timezone,
            )
            self.account_repo.add(account)

            if profile is None:
                profile = Profile(
                    email=email,
                    password=hash_password(password),
                    first_name=first_name,
                    last_name=last_name,
                    timezone=timezone,
                    status=ProfileStatus.VALID.value,
                )
                self.profile_repo.add(profile)
            await self.account_repo.flush()
            account_id, profile_id = persisted_id(account), persisted_id(profile)

            membership = ProfileAccount(
                profile_id=profile_id,
                account_id=account_id,
                role=AuthorizationRole.OWNER.value,
                status=ProfileAccountStatus.VALID.value,
            )
            self.membership_repo.add(membership)

            token = generate_session_token()
            expiration = session_expiration()
            await self.session_repo.upsert(token, profile_id, account_id, expiration)
            await self.session.commit()

        logger.info("Account created", account_id=account_id, profile_id=profile_id)
        return ProfileContext(
            profile=profile,
            account=account,
            membership=membership,
            session=Session(
                token=token,
                profile_id=profile_id,
                account_id=account_id,
                expiration=expiration,
            ),
        )

    async def add_user(
        self,
        account: Account,
        email: str,
        first_name: str,
        last_name: str,
        role: str | None = None,
    ) -> Profile:
        """Add a profile to the account, inviting it first when it is new.

        A new profile is ``not-verified`` with an unusable password until the
        invitee completes setup through the emailed link.
        """
        settings = get_settings()
        email = email.lower()
        if not is_role(role):
            role = AuthorizationRole.USER.value
        setup_token: str | None = None

        async with self.storage_errors(
            "Failed to add user to account", ErrorCode.PROFILE_CREATE_FAILED
        ):
            account_id = persisted_id(account)
            profile = await self.profile_repo.get_by_email(email)

            if profile is None:
                setup_token = generate_forgot_password_token()
                profile = Profile(
                    email=email,
                    password=hash_password(generate_token(settings.token_length)),
                    first_name=first_name,
                    last_name=last_name,
                    status=ProfileStatus.NOT_VERIFIED.value,
                    forgot_password_token=setup_token,
                    forgot_password_expiration=utc_now()
                    + timedelta(minutes=settings.add_user_token_expiration_minutes),
                )
                self.profile_repo.add(profile)
                await self.profile_repo.flush()
            elif await self.membership_repo.get(persisted_id(profile), account_id) is not None:
                raise AppError(ErrorCode.EMAIL_EXISTS_IN_ACCOUNT, "Email exists in account")

            self.membership_repo.add(
                ProfileAccount(
                    profile_id=persisted_id(profile),
                    account_id=account_id,
                    role=role,
                    status=ProfileAccountStatus.VALID.value,
                )
            )
            await self.session.commit()

        logger.info("User added to account", account_id=account.id, profile_id=profile.id, role=role)

        if setup_token is not None:
            setup_url = f"{settings.app_url}/setup?token={setup_token}"
            if not send_new_user_email(profile.email, profile.first_name, account.company, setup_url):
                logger.warning("New user email not sent", profile_id=profile.id)

        return profile

    async def remove_user(self, account_id: int, email: str) -> None:
        """Remove the association of a profile with the account. The profile stays."""
        async with self.storage_errors("Failed to remove user from account"):
            profile = await self.profile_repo.get_by_email(email.lower())
            if profile is None or profile.id is None:
                raise AppError(ErrorCode.PROFILE_NOT_FOUND, "Failed to find user in account")

            removed = await self.membership_repo.remove(profile.id, account_id)
            if removed == 0:
                raise AppError(ErrorCode.PROFILE_NOT_FOUND, "Failed to find user in account")
            await self.session.commit()

    async def get_account(self, account_id: int) -> Account | None:
        """The account unless archived."""
        async with self.storage_errors("Failed to get account"):
            return await self.account_repo.get_open(account_id)

    async def update_account(
        self,
        account_id: int,
        company: str | None = None,
        week_start: int = -1,
        timezone: str | None = None,
    ) -> Account:
        """Overwrite company and timezone when given, week start when not negative."""
        async with self.storage_errors("Failed to update account", ErrorCode.UPDATE_FAILED):
            account = await self.account_repo.get_open(account_id)
            if account is None:
                raise AppError(ErrorCode.ACCOUNT_INACTIVE, "No active account").with_status(400)

            if company and company.strip():
                account.company = company
            if timezone and timezone.strip():
                account.timezone = timezone
            if week_start >= 0:
                account.week_start = week_start
            account.updated_at = utc_now()
            await self.session.commit()
        return account

    async def close_account(self, account_id: int, reason: str) -> None:
        if not reason or not reason.strip():
            raise AppError(ErrorCode.MISSING_FIELD, "Missing close reason", field="reason")

        async with self.storage_errors("Failed to close account", ErrorCode.UPDATE_FAILED):
            account = await self.account_repo.get_open(account_id)
            if account is None:
                raise AppError(ErrorCode.UPDATE_FAILED, "Failed to close account")
            account.status = AccountStatus.ARCHIVED.value
            account.close_reason = reason
            account.updated_at = utc_now()
            await self.session.commit()

        logger.info("Account closed", account_id=account_id)

    async def get_profiles(self, account_id: int) -> list[Profile]:
        async with self.storage_errors("Failed to get profiles for account"):
            return await self.profile_repo.list_for_account(account_id)
