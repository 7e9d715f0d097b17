from __future__ import annotations

import contextlib
import logging
from typing import AsyncIterator, Optional

from fastapi import FastAPI

import tasknest
from tasknest.config import Settings
from tasknest.domain.common.time import to_iso
from tasknest.infra.clock.system_clock import SystemClock
from tasknest.infra.db.connection import Database
from tasknest.infra.db.schema_version import apply_migrations
from tasknest.ui.http.deps import build_services
from tasknest.ui.http.errors import install_error_handlers
from tasknest.ui.http.routes.categories import router as categories_router
from tasknest.ui.http.routes.tasks import router as tasks_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings, db: Optional[Database] = None) -> FastAPI:
    """
    Build the HTTP app. The database handle lives for the whole process:
    migrations run and services are wired once, at startup.
    """

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        database = db or Database(str(settings.db_path))
        await apply_migrations(database, now_iso=to_iso(SystemClock(settings.timezone).now()))
        app.state.services = build_services(database, settings)
        logger.info("API ready - db=%s", database.path)
        try:
            yield
        finally:
            logger.info("API stopping")

    app = FastAPI(
        title="tasknest",
        description="Personal tasks in user-owned categories, private or shared",
        version=tasknest.__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    install_error_handlers(app)
    app.include_router(tasks_router)
    app.include_router(categories_router)

    @app.get("/health", tags=["Health"])
    async def health() -> dict:
        return {"status": "ok"}

    return app
