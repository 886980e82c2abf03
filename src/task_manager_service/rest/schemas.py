"""Pydantic request/response models for REST API."""

from __future__ import annotations

from datetime import datetime

from pydantic import AwareDatetime, BaseModel, field_validator

from task_manager_service.domain.models import Task


class CredentialsRequest(BaseModel):
    username: str
    password: str


class PromoteRequest(BaseModel):
    username: str


class TaskRequest(BaseModel):
    title: str
    due_date: AwareDatetime
    status: str

    @field_validator("due_date", mode="before")
    @classmethod
    def due_date_is_string(cls, value: object) -> object:
        # Epoch numbers would otherwise be coerced.
        if not isinstance(value, str):
            raise ValueError("must be an RFC3339 timestamp string")
        return value

    def to_task(self) -> Task:
        return Task(title=self.title, due_date=self.due_date, status=self.status)


class TaskSchema(BaseModel):
    id: str
    title: str
    due_date: datetime
    status: str

    @classmethod
    def from_task(cls, task: Task) -> TaskSchema:
        return cls(id=task.id, title=task.title, due_date=task.due_date, status=task.status)


class MessageResponse(BaseModel):
    message: str


class LoginResponse(MessageResponse):
    token: str


class TaskCreatedResponse(MessageResponse):
    task: TaskSchema


class ErrorResponse(BaseModel):
    error: str


ERROR_RESPONSES: dict[int | str, dict] = {
    code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 500)
}
