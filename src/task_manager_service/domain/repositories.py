"""Persistence interfaces the use cases depend on."""

from __future__ import annotations

from typing import Protocol

from task_manager_service.domain.models import Task, User


class UserRepository(Protocol):
    """Users keyed by id, looked up by unique username."""

    async def create_user(self, user: User) -> User: ...
    async def update_user(self, user_id: str, user: User) -> None: ...
    async def find_by_username(self, username: str) -> User: ...
    async def count_users(self) -> int: ...


class TaskRepository(Protocol):
    """Tasks keyed by id. Missing ids raise a not-found AppError."""

    async def create_task(self, task: Task) -> Task: ...
    async def get_task(self, task_id: str) -> Task: ...
    async def get_tasks(self) -> list[Task]: ...
    async def update_task(self, task_id: str, task: Task) -> Task: ...
    async def delete_task(self, task_id: str) -> None: ...
