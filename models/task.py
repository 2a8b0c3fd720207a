"""Task model - unit of work inside a project."""

import enum
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Index, String, func, select
from sqlalchemy.orm import Mapped, column_property, mapped_column, relationship

from db import Base, utcnow
from models.fields import (
    ApiModel,
    DESCRIPTION_MAX_LENGTH,
    DateTimeInput,
    DescriptionStr,
    TITLE_MAX_LENGTH,
    TitleStr,
    UtcDateTime,
    reject_null,
)
from models.patch import FieldPatch, field_patch
from models.project import Project, ProjectResponse, ProjectSummary, new_id


class TaskStatus(str, enum.Enum):
    """Kanban columns, in board order. Any transition is allowed."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class Task(Base):
    """Task ORM model - belongs to exactly one project of the same owner."""

    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_id,
    )
    owner_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    project_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH),
        nullable=True,
    )
    status: Mapped[TaskStatus] = mapped_column(
        SAEnum(TaskStatus, name="task_status", native_enum=False, length=20),
        nullable=False,
        default=TaskStatus.TODO,
    )
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    project: Mapped[Project] = relationship(back_populates="tasks", lazy="joined")

    __table_args__ = (
        # Composite indexes for owner-scoped filtering
        Index("ix_tasks_owner_id_status", "owner_id", "status"),
        Index("ix_tasks_owner_id_due_date", "owner_id", "due_date"),
        {"comment": "Tasks are owner-scoped and cascade with their project"},
    )


# Derived count, evaluated on every read and never stored
Project.task_count = column_property(
    select(func.count(Task.id))
    .where(Task.project_id == Project.id)
    .correlate_except(Task)
    .scalar_subquery()
)


# Pydantic schemas
class TaskCreate(ApiModel):
    """Schema for creating a task.

    Note: owner_id is NOT included - it's set from the caller identity server-side.
    """

    title: TitleStr
    description: DescriptionStr | None = None
    project_id: str
    status: TaskStatus | None = None
    due_date: DateTimeInput | None = None

    @field_validator("project_id")
    @classmethod
    def _project_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Project ID is required")
        return value

    @field_validator("description", "status", mode="before")
    @classmethod
    def _not_null(cls, value):
        return reject_null(value)


class TaskUpdate(ApiModel):
    """Schema for updating a task.

    Every field is optional. ``dueDate`` may also be sent as null to clear it;
    the other fields may be omitted but not nulled.
    """

    title: TitleStr | None = None
    description: DescriptionStr | None = None
    status: TaskStatus | None = None
    due_date: DateTimeInput | None = None

    @field_validator("title", "description", "status", mode="before")
    @classmethod
    def _not_null(cls, value):
        return reject_null(value)

    def patches(self) -> dict[str, FieldPatch]:
        return {
            "title": field_patch(self, "title"),
            "description": field_patch(self, "description"),
            "status": field_patch(self, "status"),
            "due_date": field_patch(self, "due_date"),
        }


class TaskFilterParams(ApiModel):
    """Query string filters for task listings. Empty values count as absent."""

    project_id: str | None = None
    status: TaskStatus | None = None
    due_date_from: DateTimeInput | None = None
    due_date_to: DateTimeInput | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _empty_as_absent(cls, value):
        if isinstance(value, str) and value == "":
            return None
        return value


class TaskFields(ApiModel):
    """Task attributes shared by every task response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None
    status: TaskStatus
    due_date: UtcDateTime | None
    project_id: str
    created_at: UtcDateTime
    updated_at: UtcDateTime


class TaskResponse(TaskFields):
    """Schema for task response, with a summary of its project."""

    project: ProjectSummary


class ProjectDetailResponse(ProjectResponse):
    """Schema for a single project with its tasks, newest first."""

    tasks: list[TaskFields]
