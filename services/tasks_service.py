"""Service layer for Task business logic."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import project_not_found, task_not_found
from db import utcnow
from models.patch import collect_changes
from models.task import Task, TaskCreate, TaskStatus, TaskUpdate
from repos import projects_repo, tasks_repo
from services.task_filters import TaskFilters

logger = logging.getLogger(__name__)


async def list_tasks(
    session: AsyncSession,
    *,
    owner_id: str,
    filters: TaskFilters,
) -> list[Task]:
    """
    List the caller's tasks matching the filters.

    Args:
        session: Database session
        owner_id: Caller's owner ID
        filters: Optional project/status/due date criteria

    Returns:
        Tasks in board order (status, due date, newest first)
    """
    return await tasks_repo.list(session, owner_id=owner_id, filters=filters)


async def get_task(
    session: AsyncSession,
    *,
    owner_id: str,
    task_id: str,
) -> Task:
    """
    Get a task by ID.

    Raises:
        ApiError: 404 if task not found or not owned by the caller
    """
    task = await tasks_repo.get_by_id(session, owner_id=owner_id, task_id=task_id)

    if not task:
        raise task_not_found()

    return task


async def create_task(
    session: AsyncSession,
    *,
    owner_id: str,
    payload: TaskCreate,
) -> Task:
    """
    Create a task inside one of the caller's projects.

    Args:
        session: Database session
        owner_id: Caller's owner ID
        payload: Task creation data

    Returns:
        Created task with its project loaded

    Raises:
        ApiError: 404 PROJECT_NOT_FOUND if the project does not exist for the caller
    """
    project = await projects_repo.get_by_id(
        session,
        owner_id=owner_id,
        project_id=payload.project_id,
    )

    if not project:
        raise project_not_found("Project not found or access denied")

    task = Task(
        owner_id=owner_id,
        project_id=project.id,
        title=payload.title,
        description=payload.description,
        status=payload.status or TaskStatus.TODO,
        due_date=payload.due_date,
    )

    try:
        created_task = await tasks_repo.create(session, task)
        await session.commit()
    except IntegrityError:
        # Project deleted between the ownership check and the insert
        await session.rollback()
        raise project_not_found("Project not found or access denied")

    logger.info("Created task %s in project %s", created_task.id, project.id)
    return await get_task(session, owner_id=owner_id, task_id=created_task.id)


async def update_task(
    session: AsyncSession,
    *,
    owner_id: str,
    task_id: str,
    payload: TaskUpdate,
) -> Task:
    """
    Update an existing task.

    Only fields present in the request are written. ``due_date`` sent as null
    clears the due date; omitting it leaves the stored value alone.

    Raises:
        ApiError: 404 if task not found or not owned by the caller
    """
    changes = collect_changes(payload.patches())
    changes["updated_at"] = utcnow()

    updated = await tasks_repo.update_owned(
        session,
        owner_id=owner_id,
        task_id=task_id,
        values=changes,
    )

    if updated == 0:
        raise task_not_found()

    await session.commit()

    # A concurrent delete can land between the update and this read
    return await get_task(session, owner_id=owner_id, task_id=task_id)


async def delete_task(
    session: AsyncSession,
    *,
    owner_id: str,
    task_id: str,
) -> None:
    """
    Delete a task.

    Raises:
        ApiError: 404 if task not found or not owned by the caller
    """
    deleted = await tasks_repo.delete_owned(session, owner_id=owner_id, task_id=task_id)

    if deleted == 0:
        raise task_not_found()

    await session.commit()
