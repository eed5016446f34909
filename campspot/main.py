"""Campspot API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers render every failure through classify_error()
    - CORS allows exactly one origin, configured from settings
    - Database pool created on startup and drained on shutdown via lifespan
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from campspot.api.error_handlers import register_error_handlers
from campspot.api.routes import bookings, camping_spots, health, users
from campspot.config import get_settings
from campspot.infrastructure.database import close_db, init_db
from campspot.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    init_db(
        settings.sqlalchemy_url,
        pool_size=settings.database_pool_size,
        pool_timeout=settings.database_pool_timeout,
    )
    logger.info(f"Campspot API started on port {settings.port}")
    yield
    logger.info("Campspot API shutting down")
    await close_db()


app = FastAPI(title="Campspot API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
# Registered before CORS so error responses get the CORS headers too
register_error_handlers(app)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.cors_origin],
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(camping_spots.router)
app.include_router(bookings.router)

# Uploaded listing images; directory is created by the lifespan
app.mount(
    settings.upload_url_prefix,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="uploads",
)
