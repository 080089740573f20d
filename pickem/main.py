"""Pickem FastAPI application.

Stateless HTTP surface over the prediction rules engine: lock state,
completeness, scoring, next action and leaderboard.
"""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pickem import __version__
from pickem.api.routes import config, engine, health
from pickem.config import get_settings
from pickem.errors import PickemError

settings = get_settings()

logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(
        "starting_pickem",
        version=__version__,
        lock_offset_minutes=settings.lock_offset_minutes,
    )
    yield
    logger.info("shutting_down_pickem")


# Create FastAPI application
app = FastAPI(
    title="Pickem",
    description="Prediction rules engine for tournament pick'em pools",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

# Include API routers
app.include_router(health.router)
app.include_router(engine.router)
app.include_router(config.router)


# Error handlers
@app.exception_handler(PickemError)
async def pickem_error_handler(request: Request, exc: PickemError):
    """Configuration problems surface as 500 with a readable detail."""
    logger.error("pickem_error", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"detail": str(exc)})
