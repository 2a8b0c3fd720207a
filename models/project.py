"""Project model - owner-scoped container for tasks."""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from pydantic import ConfigDict, field_validator
from sqlalchemy import DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db import Base, utcnow
from models.fields import (
    ApiModel,
    DESCRIPTION_MAX_LENGTH,
    DescriptionStr,
    TITLE_MAX_LENGTH,
    TitleStr,
    UtcDateTime,
    reject_null,
)
from models.patch import FieldPatch, field_patch

if TYPE_CHECKING:
    from models.task import Task


def new_id() -> str:
    """Opaque identifier for a new row."""
    return str(uuid4())


class Project(Base):
    """Project ORM model - represents a project owned by a single caller."""

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_id,
    )
    owner_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH),
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

    # Rows are removed by the ON DELETE CASCADE on tasks.project_id
    tasks: Mapped[list["Task"]] = relationship(
        back_populates="project",
        order_by="Task.created_at.desc()",
        passive_deletes=True,
    )

    # task_count is attached in models.task once Task is mapped

    __table_args__ = (
        # Composite index for owner-scoped listings ordered by recency
        Index("ix_projects_owner_id_updated_at", "owner_id", "updated_at"),
        {"comment": "Projects are owner-scoped containers for tasks"},
    )


# Pydantic schemas
class ProjectCreate(ApiModel):
    """Schema for creating a project.

    Note: owner_id is NOT included - it's set from the caller identity server-side.
    """

    title: TitleStr
    description: DescriptionStr | None = None

    @field_validator("description", mode="before")
    @classmethod
    def _description_not_null(cls, value):
        return reject_null(value)


class ProjectUpdate(ApiModel):
    """Schema for updating a project. Omitted fields are left unchanged."""

    title: TitleStr | None = None
    description: DescriptionStr | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def _not_null(cls, value):
        return reject_null(value)

    def patches(self) -> dict[str, FieldPatch]:
        return {
            "title": field_patch(self, "title"),
            "description": field_patch(self, "description"),
        }


class ProjectSummary(ApiModel):
    """Minimal project reference embedded in task responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str


class ProjectResponse(ApiModel):
    """Schema for project response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None
    created_at: UtcDateTime
    updated_at: UtcDateTime
    task_count: int
