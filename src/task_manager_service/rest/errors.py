"""Translate errors into HTTP responses of the form {"error": message}."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from task_manager_service.domain.errors import AppError, ErrorKind

logger = structlog.get_logger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.INTERNAL: 500,
}


def status_for(kind: ErrorKind) -> int:
    return STATUS_BY_KIND.get(kind, 500)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    status_code = status_for(exc.kind)
    if status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.message)
    return error_response(status_code, exc.message)


def describe_errors(errors: Sequence[Any]) -> str:
    """Render the first validation error as "field: message"."""
    if not errors:
        return "invalid request body"
    first = errors[0]
    # Only field names; list indices and JSON decode positions are noise.
    loc = [part for part in first.get("loc", ()) if isinstance(part, str) and part != "body"]
    msg = first.get("msg", "invalid value")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, describe_errors(exc.errors()))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path)
    return error_response(500, "internal server error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
