"""Shared helpers for SQLAlchemy repositories."""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager_service.domain.errors import AppError

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 10.0


class SqlRepo:
    def __init__(self, session: AsyncSession, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._session = session
        self._timeout = timeout

    @asynccontextmanager
    async def _store_op(self, message: str) -> AsyncIterator[None]:
        """Bound a store call by the timeout and report driver failures as internal errors."""
        try:
            async with asyncio.timeout(self._timeout):
                yield
        except AppError:
            raise
        except (SQLAlchemyError, TimeoutError) as exc:
            logger.error("store_error", operation=message, error=str(exc))
            await self._session.rollback()
            raise AppError.internal(message) from exc


def parse_id(raw: str | None) -> str:
    """Normalise a client-supplied id. Anything that is not a UUID is a bad request."""
    try:
        return str(uuid.UUID(str(raw)))
    except ValueError as exc:
        raise AppError.bad_request("Invalid ID") from exc
