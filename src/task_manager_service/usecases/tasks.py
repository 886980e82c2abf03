"""Task lifecycle rules."""

from __future__ import annotations

import structlog

from task_manager_service.clock import Clock, utcnow
from task_manager_service.domain.errors import AppError
from task_manager_service.domain.models import Task
from task_manager_service.domain.repositories import TaskRepository

logger = structlog.get_logger(__name__)


class TaskUsecase:
    def __init__(self, repo: TaskRepository, clock: Clock = utcnow) -> None:
        self._repo = repo
        self._clock = clock

    async def create_task(self, task: Task) -> Task:
        """Validate and store a new task. Titles are unique across all tasks."""
        task.validate(self._clock())

        # Full scan; there is no index on title.
        for existing in await self._repo.get_tasks():
            if existing.title == task.title:
                raise AppError.bad_request("Task already exists")

        created = await self._repo.create_task(task)
        logger.info("task_created", task_id=created.id, title=created.title)
        return created

    async def get_task(self, task_id: str) -> Task:
        return await self._repo.get_task(task_id)

    async def get_tasks(self) -> list[Task]:
        return await self._repo.get_tasks()

    async def update_task(self, task_id: str, task: Task) -> Task:
        task.validate(self._clock())

        updated = await self._repo.update_task(task_id, task)
        logger.info("task_updated", task_id=task_id)
        return updated

    async def delete_task(self, task_id: str) -> None:
        await self._repo.delete_task(task_id)
        logger.info("task_deleted", task_id=task_id)
