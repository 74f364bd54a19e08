"""Koinonia API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map KoinoniaError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Every request produces one access log line (observability.log_requests)
    - Database session manager created on startup and held on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Store handle on app.state, handed to routes through get_db (no module singleton)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from koinonia.api.error_handlers import register_error_handlers
from koinonia.api.routes import auth, enrollments, events, health, users
from koinonia.config import get_settings
from koinonia.infrastructure.database import init_db
from koinonia.infrastructure.observability import log_requests, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if await app.state.db_manager.health_check():
        logger.info("Koinonia API started, database reachable")
    else:
        logger.error("Koinonia API started, database unreachable")
    yield
    await app.state.db_manager.dispose()
    logger.info("Koinonia API shutting down")


def create_app() -> FastAPI:
    app = FastAPI(title="Koinonia API", version="1.0.0", lifespan=lifespan)

    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    # Routes — explicit registration
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(auth.router)
    app.include_router(events.router)
    app.include_router(enrollments.router)

    register_error_handlers(app)
    return app


app = create_app()
