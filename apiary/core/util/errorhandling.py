"""
Error handling utilities for the Apiary Statistics Service.
Provides centralized exception handlers for FastAPI application.
"""

from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..ports.exceptions import (
    ApiaryError,
    InvalidMetricError,
    InvalidRangeError,
    ValidationError,
    HiveNotFoundError,
    NoteNotFoundError,
    RepositoryError,
    ExternalServiceError
)


async def invalid_metric_handler(request: Request, exc: InvalidMetricError):
    """Handle invalid metric errors."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid metric",
            "message": str(exc),
            "supported_metrics": exc.supported_metrics,
            "error_type": exc.__class__.__name__,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    )


async def invalid_range_handler(request: Request, exc: InvalidRangeError):
    """Handle invalid range errors."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid range",
            "message": str(exc),
            "supported_ranges": exc.supported_ranges,
            "error_type": exc.__class__.__name__,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    )


async def validation_error_handler(request: Request, exc: ValidationError):
    """Handle invalid user input."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "Validation error",
            "message": exc.message,
            "error_type": exc.__class__.__name__,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    )


async def not_found_handler(request: Request, exc: ApiaryError):
    """Handle missing hives and notes."""
    return JSONResponse(
        status_code=404,
        content={
            "error": "Not found",
            "message": exc.message,
            "error_type": exc.__class__.__name__,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    )


async def external_service_handler(request: Request, exc: ExternalServiceError):
    """Handle external service errors."""
    return JSONResponse(
        status_code=502,
        content={
            "error": "External service error",
            "message": f"Service '{exc.service_name}' is unavailable",
            "details": exc.details,
            "status_code": exc.status_code,
            "error_type": exc.__class__.__name__,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    )


async def repository_error_handler(request: Request, exc: RepositoryError):
    """Handle store failures; the client decides whether to retry."""
    return JSONResponse(
        status_code=503,
        content={
            "error": "Could not load data",
            "message": exc.message,
            "details": exc.details,
            "retryable": True,
            "error_type": exc.__class__.__name__,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    )


async def apiary_error_handler(request: Request, exc: ApiaryError):
    """Handle general apiary service errors."""
    return JSONResponse(
        status_code=500,
        content={
            "error": "Apiary service error",
            "message": exc.message,
            "details": exc.details,
            "error_type": exc.__class__.__name__,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    )


def register_error_handlers(app: FastAPI):
    """
    Register all exception handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(InvalidMetricError, invalid_metric_handler)
    app.add_exception_handler(InvalidRangeError, invalid_range_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(HiveNotFoundError, not_found_handler)
    app.add_exception_handler(NoteNotFoundError, not_found_handler)
    app.add_exception_handler(ExternalServiceError, external_service_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)
    app.add_exception_handler(ApiaryError, apiary_error_handler)
