"""Entry point - loads configuration and starts the FastAPI server."""

import asyncio
import logging
import sys

import structlog
import uvicorn
from pydantic import ValidationError

from task_manager_service.rest.app import create_app
from task_manager_service.settings import get_settings

logger = structlog.get_logger()


def configure_logging(level: str, fmt: str) -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
    )


async def main() -> None:
    try:
        settings = get_settings()
    except ValidationError as exc:
        configure_logging("INFO", "json")
        missing = [".".join(str(p) for p in err["loc"]) for err in exc.errors()]
        logger.error("config_invalid", fields=missing)
        sys.exit(1)

    configure_logging(settings.log_level, settings.log_format)

    app = create_app(settings)
    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)

    logger.info("starting_service", host=settings.host, port=settings.port)
    await server.serve()

    # Lifespan startup failed (store unreachable): uvicorn returns without serving.
    if not server.started:
        logger.error("startup_failed")
        sys.exit(3)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
