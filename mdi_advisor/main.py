"""MDI advisor FastAPI application."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mdi_advisor import __version__
from mdi_advisor.config import settings
from mdi_advisor.core.validation import InputValidationError
from mdi_advisor.i18n import get_language
from mdi_advisor.logging_config import get_logger, setup_logging
from mdi_advisor.middleware import CorrelationIdMiddleware
from mdi_advisor.routers import analysis, dose, health

setup_logging(
    log_format=settings.log_format,
    log_level=settings.log_level,
    service_name=settings.service_name,
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(
        "MDI advisor API started",
        language=get_language().value,
        iob_decay_curve=settings.iob_decay_curve.value,
    )
    yield
    logger.info("MDI advisor API shutdown complete")


app = FastAPI(
    title="MDI Advisor API",
    description="Insulin dose advisory engine for multiple daily injections",
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


@app.exception_handler(InputValidationError)
async def input_validation_error_handler(
    request: Request, exc: InputValidationError
) -> JSONResponse:
    """Engine validation failures are client errors."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=exc.to_dict(),
    )


app.include_router(health.router)
app.include_router(dose.router)
app.include_router(analysis.router)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint."""
    return {
        "name": "MDI Advisor API",
        "version": __version__,
        "docs": "/docs",
    }
