"""Task service: owner-scoped CRUD for tasks.

Learn: Every method takes the authenticated owner. Lookups go through
the OwnershipGuard, so a task id that belongs to another user behaves
exactly like an id that doesn't exist (NotFoundError).

Updates are partial: a field left as None is not touched. The owner
is never part of an update: ownership is fixed at creation.
"""

from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from taskify.auth.ownership import OwnershipGuard
from taskify.db.models import TASK_STATUS_DONE, TASK_STATUS_TODO, Task, User
from taskify.metrics import TASKS_COMPLETED, metrics

logger = structlog.get_logger()


class TaskService:
    """Business logic for task CRUD."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.guard = OwnershipGuard(db, Task, "Task")

    # ─── Create ──────────────────────────────────────────

    async def create_task(
        self,
        owner: User,
        title: str,
        description: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Task:
        """Create a task for ``owner``. Status defaults to TODO."""
        task = Task(
            title=title,
            description=description,
            status=status or TASK_STATUS_TODO,
        )
        self.guard.assign(task, owner)
        self.db.add(task)
        await self.db.commit()
        await self.db.refresh(task)

        logger.info("task.created", task_id=task.id, owner_id=owner.id)
        return task

    # ─── Read ────────────────────────────────────────────

    async def get_task(self, task_id: int, owner: User) -> Task:
        return await self.guard.find_owned(task_id, owner)

    async def list_tasks(self, owner: User) -> list[Task]:
        return await self.guard.list_owned(owner)

    # ─── Update ──────────────────────────────────────────

    async def update_task(
        self,
        task_id: int,
        owner: User,
        title: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Task:
        """Apply the non-None fields to one of ``owner``'s tasks."""
        task = await self.guard.find_owned(task_id, owner)
        completed = status == TASK_STATUS_DONE and task.status != TASK_STATUS_DONE

        changes = {}
        if title is not None:
            task.title = title
            changes["title"] = title
        if description is not None:
            task.description = description
            changes["description"] = description
        if status is not None:
            task.status = status
            changes["status"] = status

        if changes:
            await self.db.commit()
            await self.db.refresh(task)
            logger.info("task.updated", task_id=task.id, fields=sorted(changes))
        if completed:
            metrics.increment(TASKS_COMPLETED, task_id=task.id)
        return task

    # ─── Delete ──────────────────────────────────────────

    async def delete_task(self, task_id: int, owner: User) -> None:
        task = await self.guard.find_owned(task_id, owner)
        await self.db.delete(task)
        await self.db.commit()
        logger.info("task.deleted", task_id=task_id, owner_id=owner.id)
