"""FastAPI auth dependencies: bearer authentication and role authorization."""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import Depends, Request

from task_manager_service.auth.jwt import TokenService
from task_manager_service.auth.models import AuthContext
from task_manager_service.domain.errors import AppError

logger = structlog.get_logger(__name__)


def get_token_service(request: Request) -> TokenService:
    """Return the process-wide token service installed by create_app."""
    return request.app.state.token_service


TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]


def bearer_token(auth_header: str | None) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""
    if not auth_header:
        raise AppError.unauthorized("Authorization header is required")

    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AppError.unauthorized("Invalid authorization header")
    return parts[1]


async def authenticate(request: Request, tokens: TokenServiceDep) -> AuthContext:
    """
    Resolve the caller from the bearer token.

    Any failure aborts the request with 401. On success the context is also
    kept on ``request.state.auth`` for the rest of the request.
    """
    try:
        token = bearer_token(request.headers.get("Authorization"))
        claims = tokens.validate_token(token)
    except AppError as exc:
        logger.info("auth_rejected", path=request.url.path, reason=exc.message)
        raise

    context = AuthContext(username=claims.username, role=claims.role)
    request.state.auth = context
    return context


AuthContextDep = Annotated[AuthContext, Depends(authenticate)]


def authorize(*roles: str):
    """Dependency factory that enforces role membership after authentication."""

    async def _check(request: Request, context: AuthContextDep) -> AuthContext:
        if context.role not in roles:
            logger.info(
                "forbidden_role",
                path=request.url.path,
                username=context.username,
                role=context.role,
            )
            raise AppError.forbidden("You are not authorized for this action")
        return context

    return Depends(_check)
