from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from agency_bridge.db.init_db import init_db
from agency_bridge.dependencies import build_authentication_service
from agency_bridge.logging_config import configure_app_logging
from agency_bridge.routers import health, user
from agency_bridge.settings import get_settings

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        from agency_bridge.db.session import SessionLocal, engine

        settings = get_settings()
        configure_app_logging(settings.log_level, verbose_http=settings.log_http_connections)
        logger.info("App startup beginning")

        init_db(engine)
        logger.info("Database initialized (tables ensured)")

        app.state.authentication_service = build_authentication_service(settings, SessionLocal)
        logger.info("Loaded booking credentials: %s", settings.resolved_credentials_config_path())

        yield
        # Shutdown (caches are process-local, nothing to clean up)

    app = FastAPI(lifespan=lifespan)

    app.include_router(health.router)
    app.include_router(user.router)

    return app


app = create_app()
