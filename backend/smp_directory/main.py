"""SMP Directory API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SMPServerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Startup order: logging, database, schema (optional), managers, bootstrap user;
      a failing step aborts startup

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - SMPManagers stored on app.state and injected per request via Depends
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from smp_directory.api.error_handlers import register_error_handlers
from smp_directory.api.routes import (
    business_card, health, service_group, statistics, status,
)
from smp_directory.config import get_settings
from smp_directory.infrastructure.database import init_db
from smp_directory.infrastructure.observability import setup_logging
from smp_directory.services.smp_managers import create_smp_managers, ensure_bootstrap_user

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format, settings.smp_id)
    db_manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_schema:
        await db_manager.create_schema()
    managers = create_smp_managers(db_manager, settings)
    await ensure_bootstrap_user(managers, settings)
    app.state.smp_managers = managers
    logger.info(f"SMP Directory API started ({settings.smp_id})")
    yield
    logger.info("SMP Directory API shutting down")
    await db_manager.dispose()


app = FastAPI(
    title="SMP Directory API", version="1.0.0", lifespan=lifespan,
)

# CORS origins from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes, registered explicitly
app.include_router(health.router)
app.include_router(status.router)
app.include_router(statistics.router)
app.include_router(service_group.router)
app.include_router(business_card.router)

register_error_handlers(app)
