"""Integration tests for clients, projects and tasks."""

import pytest
from httpx import AsyncClient

from tests.helpers import delete_json

pytestmark = pytest.mark.integration


async def _create_client(client: AsyncClient, name: str = "Globex") -> dict:
    response = await client.post("/api/client", json={"name": name, "address": "1 Main St"})
    assert response.status_code == 200, response.text
    return response.json()["data"]


async def _create_task(client: AsyncClient, name: str = "Build") -> dict:
    response = await client.post(
        "/api/task", json={"name": name, "defaultRate": 80.0, "defaultBillable": True}
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


async def test_client_lifecycle(auth_client: AsyncClient):
    created = await _create_client(auth_client)

    response = await auth_client.put(
        "/api/client", json={"id": created["id"], "name": "Globex Corp"}
    )
    assert response.json()["data"]["name"] == "Globex Corp"
    assert response.json()["data"]["address"] == "1 Main St"

    response = await auth_client.put("/api/client/archive", json={"id": created["id"]})
    assert response.status_code == 200
    active = (await auth_client.get("/api/client/all")).json()["data"]
    archived = (await auth_client.get("/api/client/archived")).json()["data"]
    assert created["id"] not in {c["id"] for c in active}
    assert created["id"] in {c["id"] for c in archived}

    response = await auth_client.put("/api/client/restore", json={"id": created["id"]})
    assert response.status_code == 200

    response = await delete_json(auth_client, "/api/client", {"id": created["id"]})
    assert response.status_code == 200
    response = await auth_client.get(f"/api/client/{created['id']}")
    assert response.status_code == 400
    assert response.json()["code"] == "InvalidClient"


async def test_client_name_required(auth_client: AsyncClient):
    response = await auth_client.post("/api/client", json={"address": "nowhere"})

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "MissingField"
    assert body["detail"]["field"] == "name"


async def test_project_with_tasks(auth_client: AsyncClient):
    client = await _create_client(auth_client)
    task = await _create_task(auth_client)

    response = await auth_client.post(
        "/api/client/project",
        json={
            "clientId": client["id"],
            "name": "Rollout",
            "tasks": [{"id": task["id"], "billable": True, "rate": 120.0}],
        },
    )

    assert response.status_code == 200, response.text
    project = response.json()["data"]
    assert project["clientName"] == "Globex"
    assert [(t["id"], t["rate"], t["billable"]) for t in project["tasks"]] == [
        (task["id"], 120.0, True)
    ]

    response = await auth_client.put(
        "/api/client/project",
        json={"id": project["id"], "clientId": client["id"], "name": "Rollout 2", "tasks": []},
    )
    assert response.json()["data"]["name"] == "Rollout 2"
    assert response.json()["data"]["tasks"] == []

    response = await auth_client.put(
        "/api/client/project/archive", json={"projectId": project["id"]}
    )
    assert response.status_code == 200
    archived = (await auth_client.get("/api/client/project/archived")).json()["data"]
    assert project["id"] in {p["id"] for p in archived}


async def test_project_for_unknown_client(auth_client: AsyncClient):
    response = await auth_client.post(
        "/api/client/project", json={"clientId": 999999999, "name": "Orphan"}
    )

    assert response.status_code == 400
    assert response.json()["code"] == "InvalidClient"


async def test_task_archive_and_restore(auth_client: AsyncClient):
    task = await _create_task(auth_client, "Review")

    response = await auth_client.put("/api/task/archive", json={"id": task["id"]})
    assert response.status_code == 200
    response = await auth_client.get(f"/api/task/{task['id']}")
    assert response.json()["data"]["taskActive"] is False

    response = await auth_client.put("/api/task/restore", json={"id": task["id"]})
    assert response.status_code == 200
    active = (await auth_client.get("/api/task/all")).json()["data"]
    assert task["id"] in {t["id"] for t in active}
