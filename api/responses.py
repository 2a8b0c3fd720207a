"""Uniform success/error envelopes and the app's exception handlers."""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.errors import ApiError, format_validation_issues

logger = logging.getLogger(__name__)

_HTTP_ERROR_CODES = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def api_success(data: Any, message: str | None = None, status_code: int = 200) -> JSONResponse:
    """
    Build a success envelope.

    Args:
        data: JSON-serializable payload
        message: Optional human-readable message
        status_code: HTTP status (default 200)

    Returns:
        JSONResponse: ``{"success": true, "data": ..., "message": ...}``
    """
    content: dict[str, Any] = {"success": True, "data": jsonable_encoder(data)}
    if message:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content)


def api_error(
    message: str,
    status_code: int,
    code: str | None = None,
    details: Any = None,
) -> JSONResponse:
    """
    Build an error envelope.

    Returns:
        JSONResponse: ``{"success": false, "error": ..., "code": ..., "details": ...}``
    """
    content: dict[str, Any] = {"success": False, "error": message}
    if code:
        content["code"] = code
    if details:
        content["details"] = jsonable_encoder(details)
    return JSONResponse(status_code=status_code, content=content)


def handle_api_error(error: object) -> JSONResponse:
    """
    Map any failure to its error envelope, logging it once.

    Args:
        error: The raised exception (or, defensively, any other value)

    Returns:
        JSONResponse with the mapped status, message and code
    """
    if isinstance(error, ApiError):
        response = api_error(error.message, error.status_code, error.code, error.details)
    elif isinstance(error, (RequestValidationError, ValidationError)):
        response = api_error(
            "Validation failed",
            status.HTTP_400_BAD_REQUEST,
            "VALIDATION_ERROR",
            format_validation_issues(error.errors()),
        )
    elif isinstance(error, StarletteHTTPException):
        response = api_error(
            str(error.detail),
            error.status_code,
            _HTTP_ERROR_CODES.get(error.status_code, "HTTP_ERROR"),
        )
    elif isinstance(error, Exception):
        response = api_error(
            "Internal server error",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_SERVER_ERROR",
        )
    else:
        response = api_error(
            "An unexpected error occurred",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "UNKNOWN_ERROR",
        )

    if response.status_code >= 500:
        exc_info = error if isinstance(error, BaseException) else None
        logger.error("API error (%s): %r", response.status_code, error, exc_info=exc_info)
    else:
        logger.warning("API error (%s): %s", response.status_code, error)

    return response


async def _exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return handle_api_error(exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure raised while handling a request as an error envelope."""
    app.add_exception_handler(StarletteHTTPException, _exception_handler)
    app.add_exception_handler(RequestValidationError, _exception_handler)
    app.add_exception_handler(ValidationError, _exception_handler)
    app.add_exception_handler(Exception, _exception_handler)
