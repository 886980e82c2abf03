"""Request-body dependencies that run only after the auth gates pass."""

from __future__ import annotations

from typing import Annotated, Any, TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError

from task_manager_service.auth.deps import authorize
from task_manager_service.auth.models import AuthContext
from task_manager_service.domain.errors import AppError
from task_manager_service.domain.models import ROLE_ADMIN
from task_manager_service.rest.errors import describe_errors
from task_manager_service.rest.schemas import PromoteRequest, TaskRequest

M = TypeVar("M", bound=BaseModel)

AdminDep = Annotated[AuthContext, authorize(ROLE_ADMIN)]


async def parse_json_body(request: Request, model: type[M]) -> M:
    """Decode and validate the raw request body, failing with 400."""
    raw = await request.body()
    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        raise AppError.bad_request(describe_errors(exc.errors())) from exc


def json_body_doc(model: type[BaseModel]) -> dict[str, Any]:
    """OpenAPI requestBody entry for routes that read their body in a dependency."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


async def admin_task_request(request: Request, _: AdminDep) -> TaskRequest:
    return await parse_json_body(request, TaskRequest)


async def admin_promote_request(request: Request, _: AdminDep) -> PromoteRequest:
    return await parse_json_body(request, PromoteRequest)


AdminTaskRequest = Annotated[TaskRequest, Depends(admin_task_request)]
AdminPromoteRequest = Annotated[PromoteRequest, Depends(admin_promote_request)]
