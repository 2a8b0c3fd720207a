"""Failure responses over HTTP: every error uses the error envelope."""

import pytest
from fastapi import status


@pytest.mark.asyncio
async def test_missing_identity_is_unauthorized(client):
    for method, url in (
        ("GET", "/api/v1/projects"),
        ("POST", "/api/v1/projects"),
        ("GET", "/api/v1/tasks"),
        ("DELETE", "/api/v1/tasks/some-id"),
    ):
        response = await client.request(method, url, json={"title": "x"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED, url
        assert response.json() == {
            "success": False,
            "error": "Authentication required",
            "code": "UNAUTHORIZED",
        }


@pytest.mark.asyncio
async def test_blank_path_ids_are_rejected(client, headers_a):
    response = await client.get("/api/v1/projects/%20", headers=headers_a)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "INVALID_PROJECT_ID"

    response = await client.put("/api/v1/tasks/%20", json={"title": "x"}, headers=headers_a)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "INVALID_TASK_ID"


@pytest.mark.asyncio
async def test_validation_reports_every_issue(client, headers_a):
    response = await client.post(
        "/api/v1/projects",
        json={"title": "", "description": "x" * 600},
        headers=headers_a,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Validation failed"
    assert body["code"] == "VALIDATION_ERROR"
    issues = {tuple(issue["path"]): issue["message"] for issue in body["details"]}
    assert issues == {
        ("title",): "Title is required",
        ("description",): "Description is too long",
    }


@pytest.mark.asyncio
async def test_task_validation(client, headers_a, create_project_via_api, create_task_via_api):
    project = await create_project_via_api(headers_a)

    response = await client.post(
        "/api/v1/tasks",
        json={"title": "x" * 101, "projectId": project["id"], "status": "BLOCKED", "dueDate": 12},
        headers=headers_a,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    paths = {tuple(issue["path"]) for issue in response.json()["details"]}
    assert paths == {("title",), ("status",), ("dueDate",)}

    task = await create_task_via_api(headers_a, project["id"])
    response = await client.put(
        f"/api/v1/tasks/{task['id']}",
        json={"title": None, "status": None},
        headers=headers_a,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    paths = {tuple(issue["path"]) for issue in response.json()["details"]}
    assert paths == {("title",), ("status",)}


@pytest.mark.asyncio
async def test_malformed_json_is_validation_error(client, headers_a):
    response = await client.post(
        "/api/v1/projects",
        content=b'{"title": ',
        headers={**headers_a, "Content-Type": "application/json"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_unknown_route_is_not_found_envelope(client, headers_a):
    response = await client.get("/api/v1/nope", headers=headers_a)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_wrong_method_is_method_not_allowed_envelope(client, headers_a):
    response = await client.patch("/api/v1/projects", headers=headers_a)

    assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
    assert response.json()["code"] == "METHOD_NOT_ALLOWED"


@pytest.mark.asyncio
async def test_health_and_db_check(client):
    response = await client.get("/api/v1/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["success"] is True
    assert response.json()["data"]["status"] == "ok"

    response = await client.get("/api/v1/db-check")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"] == {"db": "ok"}


@pytest.mark.asyncio
async def test_blank_path_id_reported_before_body_validation(client, headers_a):
    """A blank id wins over an invalid body on update."""
    response = await client.put("/api/v1/projects/%20", json={"title": ""}, headers=headers_a)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "INVALID_PROJECT_ID"

    response = await client.put(
        "/api/v1/tasks/%20", json={"status": "BLOCKED"}, headers=headers_a
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "INVALID_TASK_ID"


@pytest.mark.asyncio
async def test_blank_path_id_without_identity_is_unauthorized(client):
    response = await client.put("/api/v1/tasks/%20", json={"status": "BLOCKED"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["code"] == "UNAUTHORIZED"
