"""
FastAPI Application Entry Point.

This is the main application file for the Daily Operations Report Backend.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from dailyops.app.core.config import settings
from dailyops.app.api.router import router as api_router
from dailyops.app.db.registry import close_registry, get_registry
from dailyops.app.core.observability import RequestLoggingMiddleware, configure_logging
from dailyops.app.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)

logger = logging.getLogger("dailyops")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup/shutdown.

    1. Configures logging.
    2. Creates missing collections with their seed defaults.
    3. Releases the storage backend on shutdown.
    """
    configure_logging(settings.log_level)
    if settings.seed_on_startup:
        await get_registry().initialize()
    logger.info("%s started (storage: %s)", settings.app_name, settings.storage_backend)
    yield
    await close_registry()


# Initialize FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    debug=settings.debug,
    description="Daily operational checks, progress tracking and report review",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

# Register global exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        dict: Status and application information
    """
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.api_version,
        "storage_backend": settings.storage_backend,
    }


# Include resource routes
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint.

    Returns:
        dict: Welcome message and API documentation links
    """
    return {
        "message": "Welcome to the Daily Operations Report API",
        "docs": "/docs",
        "health": "/health",
    }
