"""Application lifespan: logging, SQL engine and tracing on startup; teardown on exit."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.persistence import database
from app.shared.telemetry.logging import setup_logging
from app.shared.telemetry.telemetry import TelemetryConfig, get_telemetry, set_telemetry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start up, yield to serve, then shut down in reverse order.

    Without DATABASE_URL the app still starts; search requests return 503.
    """
    settings = get_settings()
    setup_logging()

    database._ensure_engine()
    if database.engine is None:
        logger.warning("DATABASE_URL not set; tag search will return 503")

    if settings.telemetry_enabled:
        telemetry = TelemetryConfig.from_settings(settings)
        if telemetry.setup(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        ):
            telemetry.instrument(app, database.engine)
            set_telemetry(telemetry)

    logger.info("%s %s started", settings.app_name, settings.app_version)
    yield

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)

    if database.engine is not None:
        await database.engine.dispose()
        logger.info("Database engine disposed")
