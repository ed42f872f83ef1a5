"""
Structured Logging Utilities

Request-scoped key/value context appended to log lines, plus a decorator
that records the start, completion or rejection of a service operation.
"""

import logging
from typing import Any, Dict, Optional
from contextvars import ContextVar
from dataclasses import asdict, is_dataclass
from functools import wraps

from exceptions import ApplicationError


# Request-scoped logging context (request_id, path, ...)
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})

# Keyword arguments copied into the log context by log_operation
_CONTEXT_KEYS = ("user_id", "rental_id", "movie_ids", "movie_id")


class StructuredLogger:
    """
    Logger that suffixes each message with ``[key=value ...]`` built from the
    current request context and any per-call fields.

    Usage:
        logger = StructuredLogger(__name__)
        logger.log(logging.INFO, "Rental created", {"rental_id": rental.id})
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def log(self, level: int, message: str, fields: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        context = {**_logging_context.get(), **(fields or {})}
        if context:
            message = f"{message} [{' '.join(f'{k}={v}' for k, v in context.items())}]"
        self.logger.log(level, message, extra={"context": context}, exc_info=exc_info)


def set_logging_context(**kwargs):
    """
    Add fields to the logging context of the current request.

    Example:
        set_logging_context(request_id="3f2a9c01b7de", path="GET /rentals")
    """
    _logging_context.set({**_logging_context.get(), **kwargs})


def clear_logging_context():
    _logging_context.set({})


def log_operation(operation_name: str):
    """
    Decorator logging a service operation with its identifiers.

    Identifiers passed as keyword arguments (user_id, rental_id, movie_ids,
    movie_id), or carried by a dataclass passed as a keyword argument, are
    attached to every line. An ApplicationError is a business
    outcome and is logged at WARNING; any other exception is logged at ERROR
    with its traceback. The exception is always re-raised.

    Example:
        @log_operation("finish_rental")
        def finish(self, rental_id: int):
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)
            fields = {"operation": operation_name}
            carried = [asdict(v) for v in kwargs.values() if is_dataclass(v) and not isinstance(v, type)]
            for source in [kwargs] + carried:
                fields.update((key, source[key]) for key in _CONTEXT_KEYS if key in source)

            logger.log(logging.DEBUG, f"Starting {operation_name}", fields)
            try:
                result = func(*args, **kwargs)
            except ApplicationError as e:
                logger.log(logging.WARNING, f"Rejected {operation_name}: {e.message}", {**fields, "kind": e.kind})
                raise
            except Exception as e:
                logger.log(logging.ERROR, f"Failed {operation_name}: {type(e).__name__}", fields, exc_info=True)
                raise
            logger.log(logging.INFO, f"Completed {operation_name}", fields)
            return result

        return wrapper

    return decorator
