"""FastAPI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI

from task_manager_service.auth.jwt import JWTService, TokenService
from task_manager_service.auth.passwords import BcryptHasher, PasswordHasher
from task_manager_service.clock import Clock, utcnow
from task_manager_service.db.engine import Database
from task_manager_service.rest.errors import register_error_handlers
from task_manager_service.rest.routes.auth import router as auth_router
from task_manager_service.rest.routes.health import router as health_router
from task_manager_service.rest.routes.tasks import router as tasks_router
from task_manager_service.settings import Settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    database: Database = app.state.database
    # Raises when the store is unreachable, which aborts startup.
    await database.init()
    yield
    await database.close()


def create_app(
    settings: Settings,
    *,
    token_service: TokenService | None = None,
    password_hasher: PasswordHasher | None = None,
    clock: Clock = utcnow,
    database: Database | None = None,
) -> FastAPI:
    app = FastAPI(
        title="Task Manager API",
        description="Task management with JWT authentication and role-based access",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.clock = clock
    app.state.database = database or Database(settings.database_url)
    app.state.password_hasher = password_hasher or BcryptHasher()
    app.state.token_service = token_service or JWTService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(hours=settings.token_ttl_hours),
        clock=clock,
    )

    register_error_handlers(app)

    # Public routes
    app.include_router(health_router, tags=["health"])

    # /register and /login are public; /promote is admin-only inside the router
    app.include_router(auth_router, tags=["auth"])

    # Protected routes
    app.include_router(tasks_router, tags=["tasks"])

    return app
