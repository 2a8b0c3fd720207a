"""create projects and tasks tables with owner_id

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create owner-scoped projects and tasks tables."""

    # Create projects table (owner-scoped)
    op.create_table('projects',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('owner_id', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        comment='Projects are owner-scoped containers for tasks'
    )
    op.create_index('ix_projects_owner_id', 'projects', ['owner_id'], unique=False)
    # Composite index for owner-scoped listings ordered by recency
    op.create_index('ix_projects_owner_id_updated_at', 'projects', ['owner_id', 'updated_at'], unique=False)

    # Create tasks table (owner-scoped, cascades with its project)
    op.create_table('tasks',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('owner_id', sa.String(length=255), nullable=False),
        sa.Column('project_id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column(
            'status',
            sa.Enum('TODO', 'IN_PROGRESS', 'DONE', name='task_status', native_enum=False, length=20),
            nullable=False,
            server_default='TODO',
        ),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        comment='Tasks are owner-scoped and cascade with their project'
    )
    op.create_index('ix_tasks_owner_id', 'tasks', ['owner_id'], unique=False)
    op.create_index('ix_tasks_project_id', 'tasks', ['project_id'], unique=False)
    # Composite indexes for owner-scoped filtering
    op.create_index('ix_tasks_owner_id_status', 'tasks', ['owner_id', 'status'], unique=False)
    op.create_index('ix_tasks_owner_id_due_date', 'tasks', ['owner_id', 'due_date'], unique=False)


def downgrade() -> None:
    """Drop tasks and projects tables."""
    op.drop_index('ix_tasks_owner_id_due_date', table_name='tasks')
    op.drop_index('ix_tasks_owner_id_status', table_name='tasks')
    op.drop_index('ix_tasks_project_id', table_name='tasks')
    op.drop_index('ix_tasks_owner_id', table_name='tasks')
    op.drop_table('tasks')
    op.drop_index('ix_projects_owner_id_updated_at', table_name='projects')
    op.drop_index('ix_projects_owner_id', table_name='projects')
    op.drop_table('projects')
