"""
Error handling decorators and utilities for API endpoints.

This module centralizes the mapping from application exceptions to HTTP
responses so every endpoint reports errors the same way.
"""

from functools import wraps
from typing import Callable
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import inspect
import logging

from constants import HTTPStatus
from exceptions import (
    ApplicationError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Internal server error. Please check server logs or contact support."


def validation_detail(error: ValidationError) -> dict:
    """Response detail for a validation failure, with per-field reasons."""
    return {"message": error.message, "errors": error.invalid_fields}


def to_http_exception(operation_name: str, error: Exception) -> HTTPException:
    """
    Convert an exception raised by an endpoint into an HTTPException.

    Internal failures are logged with traceback and answered with a generic
    message; their details never reach the client.
    """
    if isinstance(error, ValidationError):
        logger.warning(f"{operation_name} - Validation error: {error.message} {error.invalid_fields}")
        return HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=validation_detail(error))
    if isinstance(error, NotFoundError):
        logger.info(f"{operation_name} - Not found: {error.message}")
        return HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=error.message)
    if isinstance(error, ConflictError):
        logger.warning(f"{operation_name} - Conflict: {error.message}")
        return HTTPException(status_code=HTTPStatus.CONFLICT, detail=error.message)
    if isinstance(error, InternalError):
        logger.error(f"{operation_name} - Internal error: {error.message} {error.details}", exc_info=error)
        return HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=GENERIC_SERVER_ERROR)
    if isinstance(error, ApplicationError):
        logger.error(f"{operation_name} - Application error: {error.message}", exc_info=error)
        return HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=GENERIC_SERVER_ERROR)
    logger.error(f"{operation_name} - Unexpected error: {error}", exc_info=error)
    return HTTPException(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        detail=f"{operation_name} failed. Please check server logs or contact support."
    )


def handle_api_errors(operation_name: str):
    """
    Decorator to handle common API errors consistently across endpoints.

    Args:
        operation_name: Human-readable name of the operation (e.g., "Create movie")

    Returns:
        Decorated function that handles errors uniformly

    Example:
        @router.get("/{movie_id}")
        @handle_api_errors("Get movie")
        def get_movie(...):
            return service.get_by_id(movie_id)
    """
    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                # Re-raise HTTPException as-is to preserve status code and detail
                raise
            except Exception as e:
                raise to_http_exception(operation_name, e) from e

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                raise to_http_exception(operation_name, e) from e

        # Return appropriate wrapper based on whether the function is async
        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report body/query binding failures as 400 with field-level detail."""
    error = ValidationError.from_errors("Request validation failed", exc.errors(), skip=("body", "query", "path"))
    logger.warning(f"{request.method} {request.url.path} - Validation error: {error.invalid_fields}")
    return JSONResponse(status_code=HTTPStatus.BAD_REQUEST, content={"detail": validation_detail(error)})


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    """Fallback for application errors raised outside decorated endpoints (e.g. dependencies)."""
    http_error = to_http_exception(f"{request.method} {request.url.path}", exc)
    return JSONResponse(status_code=http_error.status_code, content={"detail": http_error.detail})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the application's exception handlers on a FastAPI app."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ApplicationError, application_error_handler)
