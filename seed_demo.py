"""Seed a starter project for the demo user.

Does nothing if the demo user already owns a project.
"""

import asyncio
import logging
import sys
from datetime import timedelta

import config
import logging_config
from db import AsyncSessionLocal, init_db, utcnow
from models.project import ProjectCreate
from models.task import TaskCreate, TaskStatus
from repos import projects_repo
from services.projects_service import create_project
from services.tasks_service import create_task

logger = logging.getLogger("seed_demo")


async def seed_demo() -> None:
    await init_db()
    owner_id = config.settings.DEMO_USER_ID

    async with AsyncSessionLocal() as db:
        existing = await projects_repo.list(db, owner_id=owner_id)
        if existing:
            logger.info("Demo user %s already has %d project(s)", owner_id, len(existing))
            return

        project = await create_project(
            db,
            owner_id=owner_id,
            payload=ProjectCreate(title="Getting started", description="A sample board to try things out"),
        )

        starter_tasks = [
            ("Read the board", TaskStatus.DONE, None),
            ("Move a card to In Progress", TaskStatus.TODO, utcnow() + timedelta(days=1)),
            ("Create your own project", TaskStatus.TODO, utcnow() + timedelta(days=7)),
        ]
        for title, task_status, due_date in starter_tasks:
            await create_task(
                db,
                owner_id=owner_id,
                payload=TaskCreate(
                    title=title,
                    project_id=project.id,
                    status=task_status,
                    due_date=due_date,
                ),
            )

        logger.info("Seeded project %s for demo user %s", project.id, owner_id)


if __name__ == "__main__":
    logging_config.setup_logging(config.settings.LOG_LEVEL)
    # Fix for Windows asyncio
    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    asyncio.run(seed_demo())
