"""Task endpoints with owner isolation."""

from fastapi import APIRouter, Depends, Query, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_user_id, get_db, valid_task_id
from api.errors import ApiError, internal_error, validation_failed
from api.responses import api_success
from models.task import Task, TaskCreate, TaskFilterParams, TaskResponse, TaskUpdate
from services.task_filters import TaskFilters
from services.tasks_service import create_task, delete_task, get_task, list_tasks, update_task

router = APIRouter()


def _task_out(task: Task) -> dict:
    return TaskResponse.model_validate(task).model_dump(mode="json", by_alias=True)


@router.get("/tasks")
async def list_tasks_endpoint(
    project_id: str | None = Query(None, alias="projectId"),
    task_status: str | None = Query(None, alias="status"),
    due_date_from: str | None = Query(None, alias="dueDateFrom"),
    due_date_to: str | None = Query(None, alias="dueDateTo"),
    owner_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """
    List the caller's tasks, optionally filtered.

    Query params (all optional, empty means absent):
        projectId: only tasks in this project
        status: TODO, IN_PROGRESS or DONE
        dueDateFrom / dueDateTo: inclusive due date bounds (ISO 8601)

    Returns:
        Envelope with ``tasks`` in board order, each with a project summary.
    """
    try:
        params = TaskFilterParams.model_validate(
            {
                "projectId": project_id,
                "status": task_status,
                "dueDateFrom": due_date_from,
                "dueDateTo": due_date_to,
            }
        )
    except ValidationError as e:
        raise validation_failed(e.errors()) from e

    try:
        tasks = await list_tasks(db, owner_id=owner_id, filters=TaskFilters.from_params(params))
        return api_success(
            {"tasks": [_task_out(task) for task in tasks]},
            "Tasks retrieved successfully",
        )
    except ApiError:
        raise
    except Exception as e:
        raise internal_error(f"Failed to fetch tasks: {str(e)}") from e


@router.post("/tasks", status_code=status.HTTP_201_CREATED)
async def create_task_endpoint(
    task_data: TaskCreate,
    owner_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Create a task in one of the caller's projects.

    Raises:
        404 PROJECT_NOT_FOUND if the project does not exist or belongs to someone else.
    """
    try:
        task = await create_task(db, owner_id=owner_id, payload=task_data)
        return api_success(
            {"task": _task_out(task)},
            "Task created successfully",
            status.HTTP_201_CREATED,
        )
    except ApiError:
        raise
    except Exception as e:
        await db.rollback()
        raise internal_error(f"Failed to create task: {str(e)}") from e


@router.get("/tasks/{task_id}")
async def get_task_endpoint(
    owner_id: str = Depends(get_current_user_id),
    task_id: str = Depends(valid_task_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Get a specific task.

    Raises:
        404 if task not found or owned by someone else.
    """
    try:
        task = await get_task(db, owner_id=owner_id, task_id=task_id)
        return api_success({"task": _task_out(task)}, "Task retrieved successfully")
    except ApiError:
        raise
    except Exception as e:
        raise internal_error(f"Failed to fetch task: {str(e)}") from e


@router.put("/tasks/{task_id}")
async def update_task_endpoint(
    task_data: TaskUpdate,
    owner_id: str = Depends(get_current_user_id),
    task_id: str = Depends(valid_task_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Update an existing task.

    Only provided fields will be updated; ``dueDate: null`` clears the due date.
    """
    try:
        task = await update_task(db, owner_id=owner_id, task_id=task_id, payload=task_data)
        return api_success({"task": _task_out(task)}, "Task updated successfully")
    except ApiError:
        raise
    except Exception as e:
        await db.rollback()
        raise internal_error(f"Failed to update task: {str(e)}") from e


@router.delete("/tasks/{task_id}")
async def delete_task_endpoint(
    owner_id: str = Depends(get_current_user_id),
    task_id: str = Depends(valid_task_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a task.
    """
    try:
        await delete_task(db, owner_id=owner_id, task_id=task_id)
        return api_success({}, "Task deleted successfully")
    except ApiError:
        raise
    except Exception as e:
        await db.rollback()
        raise internal_error(f"Failed to delete task: {str(e)}") from e
