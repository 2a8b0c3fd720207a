"""FastAPI dependencies for caller identity and database."""

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import invalid_project_id, invalid_task_id, unauthorized
from db import get_db as get_db_session


async def get_db() -> AsyncSession:
    """
    Dependency to get database session.
    Reuses the get_db function from db.py.
    """
    async for session in get_db_session():
        yield session


def get_current_user_id(request: Request) -> str:
    """
    Dependency to get the caller's owner ID.

    The identity middleware has already resolved the caller; this only
    enforces that one was found.

    Returns:
        str: Owner ID every query is scoped to

    Raises:
        ApiError: 401 UNAUTHORIZED if the request carries no identity
    """
    user_id = getattr(request.state, "user_id", None)
    if not user_id:
        raise unauthorized()
    return user_id


def require_path_id(value: str, error_factory) -> str:
    """
    Reject a blank path identifier.

    Args:
        value: Raw path parameter
        error_factory: Builds the ApiError to raise (invalid project/task ID)

    Returns:
        The identifier with surrounding whitespace removed
    """
    value = value.strip()
    if not value:
        raise error_factory()
    return value


def valid_project_id(project_id: str) -> str:
    """
    Dependency for the ``{project_id}`` path parameter.

    Runs before the request body is validated, so a blank id is reported as
    INVALID_PROJECT_ID even when the body is invalid too.
    """
    return require_path_id(project_id, invalid_project_id)


def valid_task_id(task_id: str) -> str:
    """Dependency for the ``{task_id}`` path parameter."""
    return require_path_id(task_id, invalid_task_id)
