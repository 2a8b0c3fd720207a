"""Task listing filters and board ordering over HTTP."""

import pytest
from fastapi import status


@pytest.fixture
async def board(headers_a, create_project_via_api, create_task_via_api):
    """Two projects with a spread of statuses and due dates."""
    launch = await create_project_via_api(headers_a, title="Launch")
    ops = await create_project_via_api(headers_a, title="Ops")

    tasks = {
        "old_todo": await create_task_via_api(
            headers_a, launch["id"], title="Old todo", dueDate="2024-12-31T23:59:59Z"
        ),
        "new_todo": await create_task_via_api(
            headers_a, launch["id"], title="New todo", dueDate="2025-01-01T00:00:00Z"
        ),
        "undated_todo": await create_task_via_api(headers_a, ops["id"], title="Undated todo"),
        "doing": await create_task_via_api(
            headers_a, ops["id"], title="Doing", status="IN_PROGRESS", dueDate="2025-01-10T00:00:00Z"
        ),
        "done": await create_task_via_api(
            headers_a, launch["id"], title="Done", status="DONE", dueDate="2025-01-05T00:00:00Z"
        ),
    }
    return {"launch": launch, "ops": ops, "tasks": tasks}


def _titles(response) -> list[str]:
    return [t["title"] for t in response.json()["data"]["tasks"]]


@pytest.mark.asyncio
async def test_list_in_board_order(client, headers_a, board):
    response = await client.get("/api/v1/tasks", headers=headers_a)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Tasks retrieved successfully"
    assert _titles(response) == ["Old todo", "New todo", "Undated todo", "Doing", "Done"]
    assert response.json()["data"]["tasks"][0]["project"]["title"] == "Launch"


@pytest.mark.asyncio
async def test_status_and_due_date_from_compose(client, headers_a, board):
    response = await client.get(
        "/api/v1/tasks",
        params={"status": "TODO", "dueDateFrom": "2025-01-01T00:00:00Z"},
        headers=headers_a,
    )

    assert _titles(response) == ["New todo"]


@pytest.mark.asyncio
async def test_due_date_range_is_inclusive(client, headers_a, board):
    response = await client.get(
        "/api/v1/tasks",
        params={"dueDateFrom": "2025-01-01T00:00:00Z", "dueDateTo": "2025-01-05T00:00:00Z"},
        headers=headers_a,
    )

    assert _titles(response) == ["New todo", "Done"]


@pytest.mark.asyncio
async def test_project_filter(client, headers_a, board):
    response = await client.get(
        "/api/v1/tasks", params={"projectId": board["ops"]["id"]}, headers=headers_a
    )

    assert _titles(response) == ["Undated todo", "Doing"]


@pytest.mark.asyncio
async def test_empty_params_are_ignored(client, headers_a, board):
    response = await client.get(
        "/api/v1/tasks",
        params={"projectId": "", "status": "", "dueDateFrom": "", "dueDateTo": ""},
        headers=headers_a,
    )

    assert response.status_code == status.HTTP_200_OK
    assert len(_titles(response)) == 5


@pytest.mark.asyncio
async def test_invalid_filter_values_are_validation_errors(client, headers_a, board):
    response = await client.get(
        "/api/v1/tasks",
        params={"status": "BLOCKED", "dueDateTo": "soon"},
        headers=headers_a,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert {tuple(issue["path"]) for issue in body["details"]} == {("status",), ("dueDateTo",)}


@pytest.mark.asyncio
async def test_out_of_range_due_dates_are_validation_errors(
    client, headers_a, create_project_via_api
):
    """Due dates that overflow once converted to UTC get 400, not 500."""
    overflowing = "9999-12-31T23:00:00-05:00"

    response = await client.get(
        "/api/v1/tasks", params={"dueDateFrom": overflowing}, headers=headers_a
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert [issue["path"] for issue in body["details"]] == [["dueDateFrom"]]

    project = await create_project_via_api(headers_a)
    response = await client.post(
        "/api/v1/tasks",
        json={"title": "Someday", "projectId": project["id"], "dueDate": overflowing},
        headers=headers_a,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert [issue["path"] for issue in response.json()["details"]] == [["dueDate"]]
