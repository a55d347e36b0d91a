"""FastAPI application entrypoint."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookshelf import __version__
from bookshelf.api import api_router
from bookshelf.core.config import Settings, get_settings
from bookshelf.core.errors import register_exception_handlers
from bookshelf.core.logging import setup_logging
from bookshelf.db import Database

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    database = Database(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        await database.create_schema()
        logger.info("%s started", settings.app_name)
        try:
            yield
        finally:
            await database.dispose()
            logger.info("%s stopped", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        docs_url=settings.docs_url,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)
    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level)
    uvicorn.run("bookshelf.main:create_app", factory=True, host=settings.host, port=settings.port, log_config=None)
