"""API error type and the fixed failure taxonomy.

Clients branch on ``code``, so every failure the API can report is created by
one of the factories below.
"""

from typing import Any, Iterable

from fastapi import HTTPException, status


class ApiError(HTTPException):
    """HTTPException that also carries a machine-readable error code."""

    def __init__(
        self,
        status_code: int,
        message: str,
        code: str | None = None,
        details: Any = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.code = code
        self.details = details

    @property
    def message(self) -> str:
        return self.detail


def format_validation_issues(errors: Iterable[dict]) -> list[dict]:
    """
    Convert pydantic/FastAPI error dicts into per-field issues.

    The request location prefix ("body", "query", "path") is dropped so the
    path names the offending field as the client sent it.

    Args:
        errors: Output of ``ValidationError.errors()``

    Returns:
        List of ``{"path": [...], "message": str, "code": str}``
    """
    issues = []
    for error in errors:
        loc = [part for part in error.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        issues.append(
            {
                "path": loc,
                "message": error.get("msg", "Invalid value"),
                "code": error.get("type", "invalid"),
            }
        )
    return issues


def unauthorized() -> ApiError:
    return ApiError(status.HTTP_401_UNAUTHORIZED, "Authentication required", "UNAUTHORIZED")


def invalid_project_id() -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, "Project ID is required", "INVALID_PROJECT_ID")


def invalid_task_id() -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, "Task ID is required", "INVALID_TASK_ID")


def validation_failed(errors: Iterable[dict]) -> ApiError:
    return ApiError(
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        "VALIDATION_ERROR",
        details=format_validation_issues(errors),
    )


def project_not_found(message: str = "Project not found") -> ApiError:
    return ApiError(status.HTTP_404_NOT_FOUND, message, "PROJECT_NOT_FOUND")


def task_not_found() -> ApiError:
    return ApiError(status.HTTP_404_NOT_FOUND, "Task not found", "TASK_NOT_FOUND")


def rate_limited() -> ApiError:
    return ApiError(status.HTTP_429_TOO_MANY_REQUESTS, "Too many requests", "RATE_LIMIT_EXCEEDED")


def internal_error(message: str) -> ApiError:
    return ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, message, "INTERNAL_SERVER_ERROR")
