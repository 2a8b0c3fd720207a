"""Translate task list filters into an owner-scoped predicate and sort order."""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import and_, case
from sqlalchemy.sql.elements import ColumnElement

from models.task import Task, TaskFilterParams, TaskStatus


@dataclass(frozen=True)
class TaskFilters:
    """Optional criteria for listing tasks. None means no constraint."""

    project_id: str | None = None
    status: TaskStatus | None = None
    due_date_from: datetime | None = None
    due_date_to: datetime | None = None

    @classmethod
    def from_params(cls, params: TaskFilterParams) -> "TaskFilters":
        return cls(
            project_id=params.project_id,
            status=params.status,
            due_date_from=params.due_date_from,
            due_date_to=params.due_date_to,
        )


def build_task_predicate(owner_id: str, filters: TaskFilters) -> ColumnElement[bool]:
    """
    Build the WHERE clause for a task listing.

    All criteria are conjoined with the owner check. Both due date bounds are
    inclusive; a bound excludes tasks that have no due date.

    Args:
        owner_id: Caller's owner ID
        filters: Criteria supplied by the caller

    Returns:
        SQLAlchemy boolean expression
    """
    clauses: list[ColumnElement[bool]] = [Task.owner_id == owner_id]

    if filters.project_id is not None:
        clauses.append(Task.project_id == filters.project_id)

    if filters.status is not None:
        clauses.append(Task.status == filters.status)

    if filters.due_date_from is not None:
        clauses.append(Task.due_date >= filters.due_date_from)

    if filters.due_date_to is not None:
        clauses.append(Task.due_date <= filters.due_date_to)

    return and_(*clauses)


def task_sort_order() -> list[ColumnElement]:
    """
    Fixed ordering for task listings.

    Status in board order (TODO, IN_PROGRESS, DONE), then due date ascending
    with undated tasks last, then newest first.
    """
    status_rank = case(
        *[(Task.status == status, rank) for rank, status in enumerate(TaskStatus)],
        else_=len(TaskStatus),
    )
    return [
        status_rank.asc(),
        # False sorts before True, so dated tasks come first
        Task.due_date.is_(None).asc(),
        Task.due_date.asc(),
        Task.created_at.desc(),
    ]
