"""Repository for Project database operations.

Every query is scoped by ``owner_id``. Mutations are single conditional
statements that report how many rows they touched, so callers never need a
separate existence check.
"""

from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from models.project import Project


async def get_by_id(
    session: AsyncSession,
    *,
    owner_id: str,
    project_id: str,
    include_tasks: bool = False,
) -> Project | None:
    """
    Get a project by ID.

    Args:
        session: Database session
        owner_id: Owner ID to filter by
        project_id: Project ID to fetch
        include_tasks: If True, eagerly load the project's tasks (newest first)

    Returns:
        Project if found and owned by owner_id, None otherwise
    """
    query = (
        select(Project)
        .where(
            Project.id == project_id,
            Project.owner_id == owner_id,
        )
        .execution_options(populate_existing=True)
    )

    if include_tasks:
        query = query.options(selectinload(Project.tasks))

    result = await session.execute(query)
    return result.scalar_one_or_none()


async def list(
    session: AsyncSession,
    *,
    owner_id: str,
) -> list[Project]:
    """
    List all projects for an owner, most recently updated first.

    Args:
        session: Database session
        owner_id: Owner ID to filter by

    Returns:
        List of projects
    """
    query = (
        select(Project)
        .where(Project.owner_id == owner_id)
        .order_by(Project.updated_at.desc())
        .execution_options(populate_existing=True)
    )

    result = await session.execute(query)
    return [project for project in result.scalars().all()]


async def create(session: AsyncSession, project: Project) -> Project:
    """
    Create a new project.

    Args:
        session: Database session
        project: Project instance to create

    Returns:
        Created project
    """
    session.add(project)
    await session.flush()
    await session.refresh(project)
    return project


async def update_owned(
    session: AsyncSession,
    *,
    owner_id: str,
    project_id: str,
    values: dict[str, Any],
) -> int:
    """
    Update a project only if it exists and belongs to owner_id.

    Args:
        session: Database session
        owner_id: Owner ID the row must match
        project_id: Project ID the row must match
        values: Column values to set

    Returns:
        Number of rows updated (0 or 1)
    """
    stmt = (
        update(Project)
        .where(
            Project.id == project_id,
            Project.owner_id == owner_id,
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
    project_id: str,
) -> int:
    """
    Delete a project only if it exists and belongs to owner_id.

    Tasks go with it through the ON DELETE CASCADE foreign key.

    Returns:
        Number of rows deleted (0 or 1)
    """
    stmt = (
        delete(Project)
        .where(
            Project.id == project_id,
            Project.owner_id == owner_id,
        )
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(stmt)
    return result.rowcount
