"""Repository for Task database operations."""

from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.task import Task
from services.task_filters import TaskFilters, build_task_predicate, task_sort_order


async def get_by_id(
    session: AsyncSession,
    *,
    owner_id: str,
    task_id: str,
) -> Task | None:
    """
    Get a task by ID, with its project loaded.

    Args:
        session: Database session
        owner_id: Owner ID to filter by
        task_id: Task ID to fetch

    Returns:
        Task if found and owned by owner_id, None otherwise
    """
    query = (
        select(Task)
        .where(
            Task.id == task_id,
            Task.owner_id == owner_id,
        )
        .execution_options(populate_existing=True)
    )

    result = await session.execute(query)
    return result.unique().scalar_one_or_none()


async def create(session: AsyncSession, task: Task) -> Task:
    """
    Create a new task.

    The caller is responsible for checking the parent project's owner first.
    """
    session.add(task)
    await session.flush()
    await session.refresh(task)
    return task


async def update_owned(
    session: AsyncSession,
    *,
    owner_id: str,
    task_id: str,
    values: dict[str, Any],
) -> int:
    """
    Update a task only if it exists and belongs to owner_id.

    Returns:
        Number of rows updated (0 or 1)
    """
    stmt = (
        update(Task)
        .where(
            Task.id == task_id,
            Task.owner_id == owner_id,
        )
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(stmt)
    return result.rowcount


async def delete_owned(
    session: AsyncSession,
    *,
    owner_id: str,
    task_id: str,
) -> int:
    """
    Delete a task only if it exists and belongs to owner_id.

    Returns:
        Number of rows deleted (0 or 1)
    """
    stmt = (
        delete(Task)
        .where(
            Task.id == task_id,
            Task.owner_id == owner_id,
        )
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(stmt)
    return result.rowcount


async def list(
    session: AsyncSession,
    *,
    owner_id: str,
    filters: TaskFilters,
) -> list[Task]:
    """
    List an owner's tasks matching the filters, in the fixed board order.

    Args:
        session: Database session
        owner_id: Owner ID to filter by
        filters: Optional criteria (project, status, due date range)

    Returns:
        List of tasks, each with its project loaded
    """
    query = (
        select(Task)
        .where(build_task_predicate(owner_id, filters))
        .order_by(*task_sort_order())
        .execution_options(populate_existing=True)
    )

    result = await session.execute(query)
    return [task for task in result.unique().scalars().all()]
