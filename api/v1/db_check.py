"""Database connectivity check endpoint."""

from fastapi import APIRouter, Depends, status
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db
from api.errors import ApiError
from api.responses import api_success

router = APIRouter()


@router.get("/db-check")
async def db_check(db: AsyncSession = Depends(get_db)):
    """
    Check database connectivity.

    Returns:
        Envelope with database status

    Raises:
        ApiError: 503 STORE_UNAVAILABLE if the database cannot be reached
    """
    try:
        # Test database connection with a simple query
        result = await db.execute(text("SELECT 1"))
        result.scalar()
        return api_success({"db": "ok"})
    except Exception as e:
        raise ApiError(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            f"Database connection failed: {str(e)}",
            "STORE_UNAVAILABLE",
        ) from e
