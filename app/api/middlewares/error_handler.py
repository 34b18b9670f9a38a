"""
Error handling middleware for the API

Provides centralized error handling and a single error envelope:
{"message": ..., "status": ..., "type": "error"}.
"""

from fastapi import Request, status, FastAPI
from fastapi.responses import JSONResponse
import logging
import traceback
import uuid

# Configure logging
logger = logging.getLogger(__name__)


def error_envelope(status_code: int, message: str) -> dict:
    return {
        "message": message,
        "status": status_code,
        "type": "error",
    }


async def http_exception_handler(request: Request, exc):
    """
    Handle HTTP exceptions, including unmatched routes, with the error envelope
    """
    error_id = str(uuid.uuid4())

    # Log the error with different levels based on status code
    if exc.status_code >= 500:
        logger.error(
            f"HTTP error {error_id}: {exc.status_code} {exc.detail} - URL: {request.url}"
        )
    elif exc.status_code >= 400:
        logger.warning(
            f"HTTP error {error_id}: {exc.status_code} {exc.detail} - URL: {request.url}"
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None)
    )


async def general_exception_handler(request: Request, exc: Exception):
    """
    Catch-all exception handler for unhandled exceptions
    """
    error_id = str(uuid.uuid4())

    # Log the full exception
    logger.error(
        f"Unhandled exception {error_id}: {str(exc)} - URL: {request.url}"
    )
    logger.error(traceback.format_exc())

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred"
        )
    )


def add_exception_handlers(app: FastAPI):
    """
    Add all exception handlers to the FastAPI app

    Args:
        app: FastAPI application
    """
    from starlette.exceptions import HTTPException

    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
