"""The authenticated principal of a request."""

from dataclasses import dataclass

from src.timetrack.models.account import Account, Profile, ProfileAccount
from src.timetrack.models.auth import Session
from src.timetrack.models.base import persisted_id


@dataclass
class ProfileContext:
    """Profile acting in one account through a session.

    ``session`` is None only between a successful password check and the
    session row being written.
    """

    profile: Profile
    account: Account
    membership: ProfileAccount
    session: Session | None = None

    @property
    def profile_id(self) -> int:
        return persisted_id(self.profile)

    @property
    def account_id(self) -> int:
        return persisted_id(self.account)

    @property
    def role(self) -> str:
        return self.membership.role

    @property
    def token(self) -> str | None:
        return self.session.token if self.session else None

    def session_token(self) -> str:
        """Token of the session opened for this context by a login."""
        if self.session is None:
            raise ValueError("Profile context has no session")
        return self.session.token
