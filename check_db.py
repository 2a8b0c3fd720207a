"""Quick script to check database records."""

import asyncio
import sys

from sqlalchemy import func, select

from db import AsyncSessionLocal
from models import Project, Task


async def check_db():
    async with AsyncSessionLocal() as db:
        projects_result = await db.execute(select(Project).order_by(Project.owner_id, Project.updated_at.desc()))
        projects = projects_result.scalars().all()

        status_result = await db.execute(
            select(Task.status, func.count(Task.id)).group_by(Task.status)
        )
        status_counts = {task_status.value: count for task_status, count in status_result.all()}

        print("=" * 50)
        print("DATABASE RECORDS")
        print("=" * 50)

        print(f"\nProjects: {len(projects)}")
        for p in projects:
            print(f"  - {p.title}")
            print(f"    ID: {p.id}")
            print(f"    Owner: {p.owner_id}")
            print(f"    Tasks: {p.task_count}")
            print()

        print(f"Tasks by status: {sum(status_counts.values())}")
        for task_status, count in status_counts.items():
            print(f"  - {task_status}: {count}")


if __name__ == "__main__":
    # Fix for Windows asyncio
    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    asyncio.run(check_db())
