"""Health check endpoint."""

from fastapi import APIRouter

import config
from api.responses import api_success

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        Envelope with status and environment information
    """
    return api_success(
        {
            "status": "ok",
            "env": config.settings.ENV,
        }
    )
