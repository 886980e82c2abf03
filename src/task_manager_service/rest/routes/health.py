"""Health check endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from task_manager_service.db.deps import get_database
from task_manager_service.db.engine import Database
from task_manager_service.domain.errors import AppError

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready")
async def ready(database: Annotated[Database, Depends(get_database)]) -> dict[str, str]:
    try:
        await database.ping()
    except (SQLAlchemyError, OSError) as exc:
        raise AppError.internal("store unavailable") from exc
    return {"status": "ready"}
