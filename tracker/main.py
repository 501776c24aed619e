from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from tracker.api.health import router as health_router
from tracker.api.metrics_endpoint import router as metrics_router
from tracker.api.rankings import router as rankings_router
from tracker.api.students import router as students_router
from tracker.core.config import SETTINGS
from tracker.core.logging import setup_logging
from tracker.db.engine import lifespan_db
from tracker.middleware.metrics import MetricsMiddleware
from tracker.middleware.request_context import RequestContextMiddleware

setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    async with lifespan_db():
        yield


app = FastAPI(
    title="unit-tracker",
    lifespan=lifespan,
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

# Last-added runs first: RequestContext → Metrics → route handler
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(rankings_router)
app.include_router(students_router)

logger.info(
    "unit-tracker started  env=%s log_level=%s port=%d leaderboard_size=%d",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    SETTINGS.leaderboard_size,
)
