"""Domain models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from task_manager_service.clock import as_utc
from task_manager_service.domain.errors import AppError

ROLE_USER = "user"
ROLE_ADMIN = "admin"

STATUS_PENDING = "pending"
STATUS_COMPLETED = "completed"
TASK_STATUSES = (STATUS_PENDING, STATUS_COMPLETED)


@dataclass
class User:
    username: str
    password_hash: str
    role: str = ROLE_USER
    id: str | None = None


@dataclass
class Task:
    title: str
    due_date: datetime | None
    status: str
    id: str | None = None

    def validate(self, now: datetime) -> None:
        """Raise a bad-request AppError describing the first rule this task breaks."""
        if not self.title:
            raise AppError.bad_request("title is required")
        if self.due_date is None or self.due_date.replace(tzinfo=None) == datetime.min:
            raise AppError.bad_request("due date is required")
        if not self.status:
            raise AppError.bad_request("status is required")
        if self.status not in TASK_STATUSES:
            raise AppError.bad_request("status must be either pending or completed")

        due = as_utc(self.due_date)
        now = as_utc(now)
        if self.status == STATUS_COMPLETED and now < due:
            raise AppError.bad_request("due date must be in the past")
        if self.status == STATUS_PENDING and now > due:
            raise AppError.bad_request("due date must be in the future")
