"""Database models."""

from db import Base

# Import all models so Alembic can detect them
from models.project import Project
from models.task import Task, TaskStatus

__all__ = [
    "Base",
    "Project",
    "Task",
    "TaskStatus",
]
