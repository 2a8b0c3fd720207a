"""Service layer for Project business logic."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import project_not_found
from db import utcnow
from models.patch import collect_changes
from models.project import Project, ProjectCreate, ProjectUpdate
from repos import projects_repo

logger = logging.getLogger(__name__)


async def list_projects(
    session: AsyncSession,
    *,
    owner_id: str,
) -> list[Project]:
    """
    List all projects owned by the caller, most recently updated first.

    Args:
        session: Database session
        owner_id: Caller's owner ID

    Returns:
        List of projects, each with its task_count
    """
    return await projects_repo.list(session, owner_id=owner_id)


async def get_project(
    session: AsyncSession,
    *,
    owner_id: str,
    project_id: str,
) -> Project:
    """
    Get a project with its tasks.

    Args:
        session: Database session
        owner_id: Caller's owner ID
        project_id: Project ID to fetch

    Returns:
        Project with tasks loaded (newest first)

    Raises:
        ApiError: 404 if project not found or not owned by the caller
    """
    project = await projects_repo.get_by_id(
        session,
        owner_id=owner_id,
        project_id=project_id,
        include_tasks=True,
    )

    if not project:
        raise project_not_found()

    return project


async def create_project(
    session: AsyncSession,
    *,
    owner_id: str,
    payload: ProjectCreate,
) -> Project:
    """
    Create a new project for the caller.

    Args:
        session: Database session
        owner_id: Caller's owner ID
        payload: Project creation data

    Returns:
        Created project
    """
    project = Project(
        owner_id=owner_id,
        title=payload.title,
        description=payload.description,
    )

    created_project = await projects_repo.create(session, project)
    await session.commit()
    await session.refresh(created_project)

    logger.info("Created project %s for owner %s", created_project.id, owner_id)
    return created_project


async def update_project(
    session: AsyncSession,
    *,
    owner_id: str,
    project_id: str,
    payload: ProjectUpdate,
) -> Project:
    """
    Update an existing project.

    The update is a single statement matching both id and owner, so a project
    that does not exist and one owned by someone else look the same.

    Args:
        session: Database session
        owner_id: Caller's owner ID
        project_id: Project ID to update
        payload: Project update data (only provided fields will be updated)

    Returns:
        Updated project

    Raises:
        ApiError: 404 if project not found or not owned by the caller
    """
    changes = collect_changes(payload.patches())
    changes["updated_at"] = utcnow()

    updated = await projects_repo.update_owned(
        session,
        owner_id=owner_id,
        project_id=project_id,
        values=changes,
    )

    if updated == 0:
        raise project_not_found()

    await session.commit()

    project = await projects_repo.get_by_id(
        session,
        owner_id=owner_id,
        project_id=project_id,
    )

    # A concurrent delete can land between the update and this read
    if not project:
        raise project_not_found()

    return project


async def delete_project(
    session: AsyncSession,
    *,
    owner_id: str,
    project_id: str,
) -> None:
    """
    Delete a project and, through the foreign key cascade, all its tasks.

    Raises:
        ApiError: 404 if project not found or not owned by the caller
    """
    deleted = await projects_repo.delete_owned(
        session,
        owner_id=owner_id,
        project_id=project_id,
    )

    if deleted == 0:
        raise project_not_found()

    await session.commit()
    logger.info("Deleted project %s for owner %s", project_id, owner_id)
