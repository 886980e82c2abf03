"""Repository for tasks."""

from __future__ import annotations

from sqlalchemy import select

from task_manager_service.clock import as_utc
from task_manager_service.db.models import TaskModel
from task_manager_service.db.repositories.base import SqlRepo, parse_id
from task_manager_service.domain.errors import AppError
from task_manager_service.domain.models import Task


def _to_task(row: TaskModel) -> Task:
    return Task(id=row.id, title=row.title, due_date=as_utc(row.due_date), status=row.status)


class TaskRepo(SqlRepo):
    async def create_task(self, task: Task) -> Task:
        # Ids are always assigned by the store.
        row = TaskModel(title=task.title, due_date=task.due_date, status=task.status)
        async with self._store_op("Error creating task"):
            self._session.add(row)
            await self._session.commit()
            await self._session.refresh(row)
        return _to_task(row)

    async def get_task(self, task_id: str) -> Task:
        tid = parse_id(task_id)
        async with self._store_op("Error retrieving task"):
            row = await self._session.get(TaskModel, tid)
        if row is None:
            raise AppError.not_found("Task not found")
        return _to_task(row)

    async def get_tasks(self) -> list[Task]:
        async with self._store_op("Error retrieving tasks"):
            result = await self._session.execute(
                select(TaskModel).order_by(TaskModel.created_at, TaskModel.id)
            )
            rows = result.scalars().all()
        return [_to_task(r) for r in rows]

    async def update_task(self, task_id: str, task: Task) -> Task:
        tid = parse_id(task_id)
        async with self._store_op("Error updating task"):
            row = await self._session.get(TaskModel, tid)
            if row is None:
                raise AppError.not_found("Task not found")
            row.title = task.title
            row.due_date = task.due_date
            row.status = task.status
            await self._session.commit()
            await self._session.refresh(row)
        return _to_task(row)

    async def delete_task(self, task_id: str) -> None:
        tid = parse_id(task_id)
        async with self._store_op("Error deleting task"):
            row = await self._session.get(TaskModel, tid)
            if row is None:
                raise AppError.not_found("Task not found")
            await self._session.delete(row)
            await self._session.commit()
