"""Account endpoints: register, login, promote."""

from __future__ import annotations

from fastapi import APIRouter

from task_manager_service.db.deps import UserUsecaseDep
from task_manager_service.rest.deps import AdminPromoteRequest, json_body_doc
from task_manager_service.rest.schemas import (
    ERROR_RESPONSES,
    CredentialsRequest,
    LoginResponse,
    MessageResponse,
    PromoteRequest,
)

router = APIRouter(responses=ERROR_RESPONSES)


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(request: CredentialsRequest, users: UserUsecaseDep) -> MessageResponse:
    """Create a user. The very first account becomes an admin."""
    await users.register(request.username, request.password)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
async def login(request: CredentialsRequest, users: UserUsecaseDep) -> LoginResponse:
    token = await users.login(request.username, request.password)
    return LoginResponse(message="Logged in successfully", token=token)


@router.post(
    "/promote",
    response_model=MessageResponse,
    openapi_extra=json_body_doc(PromoteRequest),
)
async def promote(request: AdminPromoteRequest, users: UserUsecaseDep) -> MessageResponse:
    await users.promote_user(request.username)
    return MessageResponse(message="User promoted successfully")
