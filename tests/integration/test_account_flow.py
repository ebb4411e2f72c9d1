"""Integration tests for account creation, login and membership."""

import pytest
from httpx import AsyncClient
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from src.timetrack.core.config import get_settings
from tests.factories import unique_suffix
from tests.helpers import delete_json, login
from tests.utils.cleanup import cleanup_account_cascade, cleanup_profile_cascade

pytestmark = pytest.mark.integration


async def test_create_account_logs_owner_in(client: AsyncClient, engine: AsyncEngine):
    email = f"owner_{unique_suffix()}@example.com"
    try:
        response = await client.post(
            "/api/account",
            json={
                "email": email.upper(),
                "password": "password123",
                "firstName": "Olive",
                "lastName": "Owner",
                "company": "Olive Co",
            },
        )

        assert response.status_code == 200, response.text
        data = response.json()["data"]
        assert data["company"] == "Olive Co"
        assert data["firstName"] == "Olive"
        assert get_settings().cookie_name in response.cookies

        token = response.cookies[get_settings().cookie_name]
        settings_response = await client.get(
            "/api/account", headers={"Authorization": f"Bearer {token}"}
        )
        assert settings_response.status_code == 200
        assert settings_response.json()["data"]["company"] == "Olive Co"
    finally:
        async with engine.connect() as conn:
            account_ids = (
                await conn.execute(
                    text(
                        "SELECT pa.account_id FROM profile_accounts pa "
                        "JOIN profiles p ON p.id = pa.profile_id WHERE p.email = :email"
                    ),
                    {"email": email},
                )
            ).scalars().all()
            for account_id in account_ids:
                await cleanup_account_cascade(conn, account_id)
            await cleanup_profile_cascade(conn, email)
            await conn.commit()


async def test_create_account_validation(client: AsyncClient):
    response = await client.post(
        "/api/account",
        json={
            "email": "not-an-email",
            "password": "password123",
            "firstName": "A",
            "lastName": "B",
            "company": "C",
        },
    )

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "InvalidEmail"
    assert body["detail"]["field"] == "email"


async def test_login_sets_cookie_and_token_describes_profile(
    client: AsyncClient, test_account: dict
):
    token = await login(client, test_account["email"], test_account["password"])

    response = await client.post("/api/auth/token", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["data"]["id"] == test_account["profile_id"]


async def test_unknown_token(client: AsyncClient, engine: AsyncEngine):
    response = await client.post("/api/auth/token", params={"token": "no-such-token"})

    assert response.status_code == 401
    assert response.json()["code"] == "InvalidToken"


async def test_missing_token(client: AsyncClient, engine: AsyncEngine):
    response = await client.get("/api/profile")

    assert response.status_code == 401
    assert response.json()["code"] == "MissingToken"


async def test_repeated_bad_passwords_lock_profile(client: AsyncClient, test_account: dict):
    attempts = get_settings().max_failed_login_attempts
    for _ in range(attempts):
        response = await client.post(
            "/api/auth/login", json={"email": test_account["email"], "password": "wrong-pass"}
        )
        assert response.status_code == 401
        assert response.json()["code"] == "IncorrectPassword"

    response = await client.post(
        "/api/auth/login",
        json={"email": test_account["email"], "password": test_account["password"]},
    )

    assert response.status_code == 401
    assert response.json()["code"] == "ProfileLocked"


async def test_logout_ends_session(auth_client: AsyncClient):
    response = await auth_client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json() == {}

    response = await auth_client.get("/api/profile")
    assert response.status_code == 401


async def test_add_user_twice(auth_client: AsyncClient, test_member: dict):
    response = await auth_client.post(
        "/api/account/user",
        json={"email": test_member["email"], "firstName": "M", "lastName": "E", "role": "user"},
    )

    # Existing members are reported with a 200 error envelope
    assert response.status_code == 200
    assert response.json()["code"] == "EmailExistsInAccount"


async def test_add_and_remove_user(auth_client: AsyncClient, engine: AsyncEngine):
    email = f"invitee_{unique_suffix()}@example.com"
    try:
        response = await auth_client.post(
            "/api/account/user",
            json={"email": email, "firstName": "In", "lastName": "Vitee"},
        )
        assert response.status_code == 200
        assert response.json() == {}

        users = (await auth_client.get("/api/account/users")).json()["data"]
        assert email in {user["email"] for user in users}

        response = await delete_json(auth_client, "/api/account/user", {"email": email})
        assert response.status_code == 200

        response = await delete_json(auth_client, "/api/account/user", {"email": email})
        assert response.json()["code"] == "ProfileNotFound"
    finally:
        async with engine.connect() as conn:
            await cleanup_profile_cascade(conn, email)
            await conn.commit()


async def test_plain_user_cannot_manage_account(client: AsyncClient, test_member: dict):
    token = await login(client, test_member["email"], test_member["password"])

    response = await client.get("/api/account", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["code"] == "NotAuthorized"


async def test_update_account_week_start(auth_client: AsyncClient):
    response = await auth_client.put(
        "/api/account", json={"company": "Renamed", "weekStart": 0, "timezone": "Europe/Paris"}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert (data["company"], data["weekStart"], data["timezone"]) == (
        "Renamed",
        0,
        "Europe/Paris",
    )
