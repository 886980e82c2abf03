"""FastAPI dependency injection for database sessions, repositories and use cases."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager_service.auth.deps import TokenServiceDep
from task_manager_service.auth.passwords import PasswordHasher
from task_manager_service.db.engine import Database
from task_manager_service.db.repositories.tasks import TaskRepo
from task_manager_service.db.repositories.users import UserRepo
from task_manager_service.domain.repositories import TaskRepository, UserRepository
from task_manager_service.usecases.tasks import TaskUsecase
from task_manager_service.usecases.users import UserUsecase


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_session(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncIterator[AsyncSession]:
    """Yield an async DB session, auto-closing on exit."""
    async with database.session_factory() as session:
        yield session


SessionDep = Annotated[AsyncSession, Depends(get_session)]


def _store_timeout(request: Request) -> float:
    return request.app.state.settings.store_timeout_seconds


def get_user_repo(request: Request, session: SessionDep) -> UserRepository:
    return UserRepo(session, timeout=_store_timeout(request))


def get_task_repo(request: Request, session: SessionDep) -> TaskRepository:
    return TaskRepo(session, timeout=_store_timeout(request))


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


UserRepoDep = Annotated[UserRepository, Depends(get_user_repo)]
TaskRepoDep = Annotated[TaskRepository, Depends(get_task_repo)]
PasswordHasherDep = Annotated[PasswordHasher, Depends(get_password_hasher)]


def get_user_usecase(
    repo: UserRepoDep, hasher: PasswordHasherDep, tokens: TokenServiceDep
) -> UserUsecase:
    return UserUsecase(repo, hasher, tokens)


def get_task_usecase(request: Request, repo: TaskRepoDep) -> TaskUsecase:
    return TaskUsecase(repo, clock=request.app.state.clock)


UserUsecaseDep = Annotated[UserUsecase, Depends(get_user_usecase)]
TaskUsecaseDep = Annotated[TaskUsecase, Depends(get_task_usecase)]
