"""Test helper functions for common request and data creation patterns."""

from httpx import AsyncClient, Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.timetrack.core.config import get_settings
from src.timetrack.models import AuthorizationRole, Profile, ProfileAccount
from tests.factories import ProfileAccountFactory, ProfileFactory


async def create_profile_in_account(
    session: AsyncSession,
    account_id: int,
    role: AuthorizationRole = AuthorizationRole.USER,
    **profile_kwargs,
) -> tuple[Profile, ProfileAccount]:
    """Create a profile and its membership in an account.

    Args:
        session: Database session
        account_id: Account to join
        role: Role for the membership (default: USER)
        **profile_kwargs: Additional args passed to ProfileFactory

    Returns:
        Tuple of (profile, membership)
    """
    profile = ProfileFactory.build(**profile_kwargs)
    session.add(profile)
    await session.flush()

    membership = ProfileAccountFactory.build(
        profile_id=profile.id,
        account_id=account_id,
        role=role.value,
    )
    session.add(membership)
    await session.flush()

    return profile, membership


async def login(client: AsyncClient, email: str, password: str) -> str:
    """Log in and return the session token from the cookie."""
    response = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.cookies[get_settings().cookie_name]


async def delete_json(client: AsyncClient, url: str, body: dict) -> Response:
    """DELETE with a JSON body, which ``AsyncClient.delete`` does not accept."""
    return await client.request("DELETE", url, json=body)
