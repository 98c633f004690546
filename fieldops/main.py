"""FieldOps Dispatch: FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fieldops.adapters.persistence.database import engine
from fieldops.config import settings
from fieldops.infrastructure.api.routes_assignments import router as assignments_router
from fieldops.infrastructure.api.routes_auth import router as auth_router
from fieldops.infrastructure.api.routes_health import router as health_router
from fieldops.infrastructure.api.routes_technicians import router as technicians_router
from fieldops.infrastructure.api.routes_work_orders import router as work_orders_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Dispatch rules: busy at load %d, lockout after %d failures for %d min, channels=%s",
        settings.saturation_threshold,
        settings.max_failed_attempts,
        settings.lockout_minutes,
        ",".join(settings.notification_channels),
    )
    try:
        async with engine.connect():
            pass
        logger.info("Database reachable")
    except Exception as e:
        # Registries are unusable until the database is up; /api/health reports it
        logger.warning("Database not reachable on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="FieldOps Dispatch",
        description="Work order assignment to field technicians with supervisor login",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in (
        health_router,
        auth_router,
        technicians_router,
        work_orders_router,
        assignments_router,
    ):
        app.include_router(router, prefix="/api")

    return app


app = create_app()
