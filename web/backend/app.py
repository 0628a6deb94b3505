#!/usr/bin/env python3
"""
PracticeMatch API - FastAPI Application

Swipe/match and interview scheduling backend for dental practice staffing.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

from core.connections import ConnectionRegistry
from core.exceptions import ServiceException
from .config import get_config
from .exceptions import (
    service_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler
)
from .models.responses import HealthResponse
from .rate_limit import add_rate_limit_handlers
from .routers import matches_router, interviews_router

# Load configuration
config = get_config()

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.logging.level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="PracticeMatch API",
        description="Likes, matches and interviews between candidates and dental practices",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Configure rate limiting
    add_rate_limit_handlers(app)

    # Register exception handlers
    app.add_exception_handler(ServiceException, service_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include routers
    app.include_router(matches_router)
    app.include_router(interviews_router)

    # Per-process socket bookkeeping for the chat gateway
    app.state.connections = ConnectionRegistry()

    @app.get("/health", response_model=HealthResponse)
    def health_check():
        """Health check endpoint."""
        return HealthResponse(status="healthy", service="practicematch-api")

    return app


app = create_app()


def main():
    """Run the web server."""
    import uvicorn

    logger.info(f"Starting PracticeMatch API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level=config.logging.level.lower()
    )


if __name__ == "__main__":
    main()
