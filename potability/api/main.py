"""
FastAPI Application — Potability Prediction API

Presentation collaborator around the classification engine.
Any "analyzing" delay belongs to the client, never to this service.

CORS: Configured via environment variables.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from potability.config import settings
from potability.errors import UnknownVariantError, ValidationError
from .routes import get_rules, router


# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: fail fast on a broken rule table
    registry = get_rules()
    logger.info(f"🚀 Starting {settings.PROJECT_NAME}")
    logger.info(f"📍 Running in {settings.ENVIRONMENT} mode")
    logger.info(f"💧 Variants: {', '.join(registry.variants)} (default: {settings.DEFAULT_VARIANT})")
    yield
    # Shutdown
    logger.info(f"👋 Shutting down {settings.PROJECT_NAME}")


# Application metadata
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Rule-based water potability scoring API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# CORS Configuration — loaded from settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Missing or non-numeric measurements -> 422 with every offending field."""
    logger.warning(f"Rejected prediction on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "fields": exc.fields},
    )


@app.exception_handler(UnknownVariantError)
async def unknown_variant_handler(request: Request, exc: UnknownVariantError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc), "available": exc.available},
    )


# Include API routes
app.include_router(router, tags=["Potability"])


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint — points at docs."""
    return {
        "message": "Water Potability API",
        "docs": "/docs",
        "variants": "/variants"
    }


@app.get("/ping", tags=["Health"])
async def ping():
    """Lightweight heartbeat — no rule evaluation."""
    return {"status": "ok"}
