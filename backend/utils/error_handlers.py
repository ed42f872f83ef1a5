"""
Error handling decorators and utilities for API endpoints.

Services raise ApplicationError subclasses and never catch them; this module
is the single place where those outcomes become HTTP responses.
"""

import inspect
from functools import wraps
from typing import Callable
from fastapi import HTTPException
import logging

from constants import HTTPStatus
from exceptions import (
    ApplicationError,
    ConfigurationError,
    DatabaseError,
    DataIntegrityError,
    InsufficientAgeError,
    MovieInRentalError,
    NotFoundError,
    PendingRentalError,
    RentalAlreadyClosedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Expected business outcomes: logged as warnings, returned with their own status
EXPECTED_ERROR_STATUS = (
    (ValidationError, HTTPStatus.BAD_REQUEST),
    (NotFoundError, HTTPStatus.NOT_FOUND),
    (PendingRentalError, HTTPStatus.PAYMENT_REQUIRED),
    (MovieInRentalError, HTTPStatus.CONFLICT),
    (RentalAlreadyClosedError, HTTPStatus.CONFLICT),
    (InsufficientAgeError, HTTPStatus.FORBIDDEN),
)

# Server-side failures: logged with traceback
SERVER_ERROR_STATUS = (
    (DatabaseError, HTTPStatus.SERVICE_UNAVAILABLE),
    (DataIntegrityError, HTTPStatus.INTERNAL_SERVER_ERROR),
    (ConfigurationError, HTTPStatus.INTERNAL_SERVER_ERROR),
)


def status_for(error: ApplicationError) -> int:
    """HTTP status code for an application error"""
    for error_type, status in EXPECTED_ERROR_STATUS + SERVER_ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return HTTPStatus.INTERNAL_SERVER_ERROR


def to_http_exception(operation_name: str, error: Exception) -> HTTPException:
    """
    Convert an exception raised by a service into an HTTPException.

    Args:
        operation_name: Human-readable name of the operation, used in logs
        error: The exception raised

    Returns:
        HTTPException whose detail is ``{"kind": ..., "message": ...}``
    """
    if isinstance(error, ApplicationError):
        status = status_for(error)
        if any(isinstance(error, error_type) for error_type, _ in EXPECTED_ERROR_STATUS):
            logger.warning(f"{operation_name} - {error.kind}: {error.message}")
        else:
            logger.error(f"{operation_name} - {error.kind}: {error.message}", exc_info=error)
        return HTTPException(status_code=status, detail=error.to_dict())

    logger.error(f"{operation_name} - Unexpected error: {error}", exc_info=error)
    return HTTPException(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        detail={
            "kind": "InternalError",
            "message": f"{operation_name} failed. Please check server logs or contact support."
        }
    )


def handle_api_errors(operation_name: str):
    """
    Decorator to handle application errors consistently across endpoints.

    Args:
        operation_name: Human-readable name of the operation (e.g., "Rental creation")

    Returns:
        Decorated function that handles errors uniformly

    Example:
        @router.post("/rentals")
        @handle_api_errors("Rental creation")
        def create_rental(...):
            return service.create_rental(...)
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
