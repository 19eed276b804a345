"""
Taskboard API - FastAPI Application Factory

Users and Tasks REST API over MongoDB, keeping task assignments and the
users' pending-task lists in sync.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.api.exception_handlers import register_exception_handlers
from taskboard.api.routers import home, tasks, users
from taskboard.application.settings import Settings, app_settings, configure_logging
from taskboard.infrastructure import close_db, connect_db, init_indexes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - opens the store and creates indexes on startup."""
    settings: Settings = app.state.settings
    logger.info(f"{settings.app_name} starting up ({settings.environment}, store={settings.store_backend})...")

    await connect_db(settings)
    await init_indexes()

    yield

    await close_db()
    logger.info(f"{settings.app_name} shutting down...")


def create_app(settings: Settings | None = None) -> FastAPI:
    """FastAPI application factory."""
    settings = settings or app_settings
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Users and Tasks API with bidirectional assignment synchronization.",
        version=settings.app_version,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    if settings.enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(home.router, tags=["Health"])
    app.include_router(users.router, prefix="/api/users", tags=["Users"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])

    logger.info(f"{settings.app_name} application created")
    return app


if __name__ == "__main__":
    uvicorn.run(
        "taskboard.main:create_app",
        factory=True,
        host=app_settings.app_host,
        port=app_settings.app_port,
        reload=app_settings.debug,
    )
