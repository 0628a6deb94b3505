#!/usr/bin/env python3
"""
Error handlers for the web application.

Service layer exceptions live in core.exceptions; each carries the HTTP
status it maps to.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.exceptions import ServiceException

logger = logging.getLogger(__name__)


def _error_body(message: str, error_type: str) -> dict:
    return {
        "success": False,
        "error": message,
        "message": message,
        "type": error_type
    }


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = getattr(exc, 'status_code', 500)
    if status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"{exc.__class__.__name__} in {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status_code,
        content=_error_body(str(exc), exc.__class__.__name__)
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """Handle FastAPI HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail, "HTTPException"),
        headers=getattr(exc, 'headers', None)
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies and parameters are 400s, like service validation errors."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get('loc', ()) if part != 'body')
    message = f"Invalid {field}: {first.get('msg')}" if field else "Invalid request"

    return JSONResponse(
        status_code=400,
        content=_error_body(message, "ValidationException")
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content=_error_body("Internal server error", "InternalError")
    )
