"""Project endpoints with owner isolation."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_user_id, get_db, valid_project_id
from api.errors import ApiError, internal_error
from api.responses import api_success
from models.project import Project, ProjectCreate, ProjectResponse, ProjectUpdate
from models.task import ProjectDetailResponse
from services.projects_service import (
    create_project,
    delete_project,
    get_project,
    list_projects,
    update_project,
)

router = APIRouter()


def _project_out(project: Project) -> dict:
    return ProjectResponse.model_validate(project).model_dump(mode="json", by_alias=True)


@router.get("/projects")
async def list_projects_endpoint(
    owner_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """
    List the caller's projects, most recently updated first.

    Returns:
        Envelope with ``projects``, each including ``taskCount``.
    """
    try:
        projects = await list_projects(db, owner_id=owner_id)
        return api_success(
            {"projects": [_project_out(project) for project in projects]},
            "Projects retrieved successfully",
        )
    except ApiError:
        raise
    except Exception as e:
        raise internal_error(f"Failed to fetch projects: {str(e)}") from e


@router.post("/projects", status_code=status.HTTP_201_CREATED)
async def create_project_endpoint(
    project_data: ProjectCreate,
    owner_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Create a new project.

    Note: the owner is always the caller; any owner field in the body is ignored.
    """
    try:
        project = await create_project(db, owner_id=owner_id, payload=project_data)
        return api_success(
            {"project": _project_out(project)},
            "Project created successfully",
            status.HTTP_201_CREATED,
        )
    except ApiError:
        raise
    except Exception as e:
        await db.rollback()
        raise internal_error(f"Failed to create project: {str(e)}") from e


@router.get("/projects/{project_id}")
async def get_project_endpoint(
    owner_id: str = Depends(get_current_user_id),
    project_id: str = Depends(valid_project_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Get a specific project with its tasks.

    Raises:
        404 if project not found or owned by someone else.
    """
    try:
        project = await get_project(db, owner_id=owner_id, project_id=project_id)
        detail = ProjectDetailResponse.model_validate(project).model_dump(mode="json", by_alias=True)
        return api_success({"project": detail}, "Project retrieved successfully")
    except ApiError:
        raise
    except Exception as e:
        raise internal_error(f"Failed to fetch project: {str(e)}") from e


@router.put("/projects/{project_id}")
async def update_project_endpoint(
    project_data: ProjectUpdate,
    owner_id: str = Depends(get_current_user_id),
    project_id: str = Depends(valid_project_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Update an existing project.

    Only provided fields will be updated.
    """
    try:
        project = await update_project(
            db,
            owner_id=owner_id,
            project_id=project_id,
            payload=project_data,
        )
        return api_success({"project": _project_out(project)}, "Project updated successfully")
    except ApiError:
        raise
    except Exception as e:
        await db.rollback()
        raise internal_error(f"Failed to update project: {str(e)}") from e


@router.delete("/projects/{project_id}")
async def delete_project_endpoint(
    owner_id: str = Depends(get_current_user_id),
    project_id: str = Depends(valid_project_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a project and all of its tasks.
    """
    try:
        await delete_project(db, owner_id=owner_id, project_id=project_id)
        return api_success({}, "Project deleted successfully")
    except ApiError:
        raise
    except Exception as e:
        await db.rollback()
        raise internal_error(f"Failed to delete project: {str(e)}") from e
