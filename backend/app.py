"""FastAPI application factory."""

import logging

from fastapi import FastAPI

from api.errors import register_exception_handlers
from api.v1 import api_router
from core import settings


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def create_app() -> FastAPI:
    configure_logging()
    application = FastAPI(title=settings.app_name)
    register_exception_handlers(application)
    application.include_router(api_router)

    @application.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
