"""DoseWatch FastAPI application."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dosewatch import __version__
from dosewatch.config import settings
from dosewatch.database import close_database
from dosewatch.logging_config import get_logger, setup_logging
from dosewatch.middleware import CorrelationIdMiddleware
from dosewatch.routers import health, insulin, sensors, streaks

setup_logging(
    log_format=settings.log_format,
    log_level=settings.log_level,
    service_name=settings.service_name,
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Migrations are run by `dosewatch-migrate` before the server starts
    logger.info(
        "DoseWatch API started",
        short_acting_duration_hours=settings.short_acting_duration_hours,
    )

    yield

    logger.info("Shutting down DoseWatch API...")
    await close_database()
    logger.info("DoseWatch API shutdown complete")


app = FastAPI(
    title="DoseWatch API",
    description="Insulin on board, risk alerts, streaks and sensor supply",
    version=__version__,
    lifespan=lifespan,
)

# Middleware (order matters: first added = last executed)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

app.include_router(health.router)
app.include_router(insulin.router)
app.include_router(streaks.router)
app.include_router(sensors.router)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint."""
    return {
        "name": "DoseWatch API",
        "version": __version__,
        "docs": "/docs",
    }
