from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from core.db import Database
from core.errors import install_error_handlers
from core.log import configure_logging
from core.settings import Settings, load_settings
from texts import repository as texts_repository
from texts import router as texts_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Open the storage client once per process; any failure here is fatal.
    settings: Settings = app.state.settings
    try:
        if app.state.db is None:
            app.state.db = Database(
                settings.database_url,
                min_size=settings.pool_min_size,
                max_size=settings.pool_max_size,
                command_timeout=settings.command_timeout,
            )
        await app.state.db.connect()
        await texts_repository.ensure_table(app.state.db)
    except Exception:
        logger.exception("startup_failed")
        if app.state.db is not None:
            await app.state.db.close()
        raise

    try:
        yield
    finally:
        await app.state.db.close()


def create_app(*, database: Database | None = None, settings: Settings | None = None) -> FastAPI:
    """
    Build the API app. Pass `database` to supply the storage client directly.
    """
    application = FastAPI(title="text-store", lifespan=lifespan)
    application.state.settings = settings or load_settings()
    application.state.db = database

    install_error_handlers(application)
    application.include_router(texts_router.router, tags=["texts"])

    @application.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @application.get("/")
    def root() -> dict:
        return {"message": "text-store api"}

    return application


app = create_app()


def run() -> None:
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)
    logger.info("server_starting url=http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, lifespan="on")


if __name__ == "__main__":
    run()
