"""Integration tests for logging time against projects."""

from datetime import date, timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from tests.helpers import delete_json

pytestmark = pytest.mark.integration

# Monday; the test account's week starts on Monday
WEEK_START = date(2019, 1, 7)
WEEK_END = WEEK_START + timedelta(days=6)


def _entry(catalog: dict, day: date, hours: float) -> dict:
    return {
        "day": day.isoformat(),
        "hours": hours,
        "projectId": catalog["project_id"],
        "taskId": catalog["task_id"],
    }


async def _week(client: AsyncClient, start: date = WEEK_START) -> dict:
    response = await client.get(f"/api/time/week/{start.isoformat()}")
    assert response.status_code == 200, response.text
    return response.json()["data"]


async def test_saving_twice_keeps_one_row(auth_client: AsyncClient, catalog: dict):
    for hours in (2.0, 3.5):
        response = await auth_client.post(
            "/api/time", json={"entries": [_entry(catalog, WEEK_START, hours)]}
        )
        assert response.status_code == 200
        assert response.json() == {}

    week = await _week(auth_client)

    assert week["start"] == WEEK_START.isoformat()
    assert week["end"] == WEEK_END.isoformat()
    assert len(week["entries"]) == 1
    entry = week["entries"][0]
    assert entry["hours"] == 3.5
    assert (entry["clientName"], entry["projectName"], entry["taskName"]) == (
        "Acme",
        "Website",
        "Design",
    )


async def test_any_day_resolves_to_its_week(auth_client: AsyncClient, catalog: dict):
    await auth_client.post("/api/time", json={"entries": [_entry(catalog, WEEK_START, 1.0)]})

    week = await _week(auth_client, WEEK_START + timedelta(days=3))

    assert week["start"] == WEEK_START.isoformat()
    assert len(week["entries"]) == 1


async def test_negative_hours_are_saved_as_zero(auth_client: AsyncClient, catalog: dict):
    await auth_client.post("/api/time", json={"entries": [_entry(catalog, WEEK_START, -4.0)]})

    week = await _week(auth_client)

    assert week["entries"][0]["hours"] == 0.0


async def test_update_inserts_missing_rows(auth_client: AsyncClient, catalog: dict):
    response = await auth_client.put(
        "/api/time", json={"entries": [_entry(catalog, WEEK_START + timedelta(days=1), 6.0)]}
    )
    assert response.status_code == 200

    week = await _week(auth_client)

    assert [(e["day"], e["hours"]) for e in week["entries"]] == [("2019-01-08", 6.0)]


async def test_missing_entries(auth_client: AsyncClient):
    response = await auth_client.post("/api/time", json={})

    assert response.status_code == 400
    assert response.json()["code"] == "InvalidJson"


async def test_project_from_another_account(auth_client: AsyncClient, catalog: dict):
    entry = _entry(catalog, WEEK_START, 1.0)
    entry["projectId"] = catalog["project_id"] + 100000

    response = await auth_client.post("/api/time", json={"entries": [entry]})

    assert response.status_code == 400
    assert response.json()["code"] == "InvalidProject"


async def test_add_project_to_week_then_delete(auth_client: AsyncClient, catalog: dict):
    body = {
        "startDate": WEEK_START.isoformat(),
        "endDate": WEEK_END.isoformat(),
        "projectId": catalog["project_id"],
        "taskId": catalog["task_id"],
    }

    response = await auth_client.post("/api/time/project/week", json=body)
    assert response.status_code == 200
    week = await _week(auth_client)
    assert len(week["entries"]) == 7
    assert {e["hours"] for e in week["entries"]} == {0.0}

    response = await delete_json(auth_client, "/api/time/project/week", body)
    assert response.status_code == 200
    assert (await _week(auth_client))["entries"] == []

    # Nothing left to delete
    response = await delete_json(auth_client, "/api/time/project/week", body)
    assert response.status_code == 400
    assert response.json()["code"] == "InvalidField"


async def test_delete_limited_to_one_week(auth_client: AsyncClient, catalog: dict):
    response = await delete_json(
        auth_client,
        "/api/time/project/week",
        {
            "startDate": WEEK_START.isoformat(),
            "endDate": (WEEK_START + timedelta(days=8)).isoformat(),
            "projectId": catalog["project_id"],
            "taskId": catalog["task_id"],
        },
    )

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "InvalidField"
    assert "1 week" in body["message"]


async def test_copy_last_week_without_entries(auth_client: AsyncClient, catalog: dict):
    response = await auth_client.post(
        "/api/client/project/copy/last/week",
        json={"startDate": WEEK_START.isoformat(), "endDate": WEEK_END.isoformat()},
    )

    assert response.status_code == 200
    assert response.json() == {}


async def test_copy_last_week_carries_projects(
    auth_client: AsyncClient, catalog: dict, db_session: AsyncSession, test_account: dict
):
    prior_monday = WEEK_START - timedelta(days=7)
    await auth_client.post("/api/time", json={"entries": [_entry(catalog, prior_monday, 8.0)]})

    response = await auth_client.post(
        "/api/client/project/copy/last/week",
        json={"startDate": WEEK_START.isoformat(), "endDate": WEEK_END.isoformat()},
    )

    assert response.status_code == 200
    entries = response.json()["data"]["entries"]
    assert len(entries) == 7
    assert {e["hours"] for e in entries} == {0.0}

    count = (
        await db_session.execute(
            text("SELECT count(*) FROM time_entries WHERE account_id = :id"),
            {"id": test_account["account_id"]},
        )
    ).scalar_one()
    assert count == 8


async def test_copy_last_week_into_a_logged_week_changes_nothing(
    auth_client: AsyncClient, catalog: dict, db_session: AsyncSession, test_account: dict
):
    prior_monday = WEEK_START - timedelta(days=7)
    await auth_client.post("/api/time", json={"entries": [_entry(catalog, prior_monday, 8.0)]})
    await auth_client.post("/api/time", json={"entries": [_entry(catalog, WEEK_START, 2.0)]})

    response = await auth_client.post(
        "/api/client/project/copy/last/week",
        json={"startDate": WEEK_START.isoformat(), "endDate": WEEK_END.isoformat()},
    )

    assert response.status_code == 500
    assert response.json()["code"] == "SystemError"

    count = (
        await db_session.execute(
            text("SELECT count(*) FROM time_entries WHERE account_id = :id"),
            {"id": test_account["account_id"]},
        )
    ).scalar_one()
    assert count == 2
    week = await _week(auth_client)
    assert [e["hours"] for e in week["entries"]] == [2.0]


async def test_report_and_export(auth_client: AsyncClient, catalog: dict):
    await auth_client.post("/api/time", json={"entries": [_entry(catalog, WEEK_START, 4.0)]})
    params = {"from": WEEK_START.isoformat(), "to": WEEK_END.isoformat()}

    response = await auth_client.get("/api/report/time/project", params=params)

    assert response.status_code == 200
    [row] = response.json()["data"]
    assert row["projectName"] == "Website"
    assert row["billableHours"] == 4.0
    assert row["billableTotal"] == 200.0

    export = await auth_client.get("/api/report/time/export/project", params=params)

    assert export.status_code == 200
    assert export.headers["content-type"].startswith("text/csv")
    assert export.headers["content-disposition"].startswith("attachment;filename=export_")
    assert export.text.splitlines()[1] == "Acme,Website, 0.00, 4.00, 200.00"


async def test_report_requires_from(auth_client: AsyncClient):
    response = await auth_client.get("/api/report/time/person")

    assert response.status_code == 400
    assert response.json()["detail"]["field"] == "from"
