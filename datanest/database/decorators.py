#!/usr/bin/env python3
"""
decorators.py
--------------------
Shared decorators and context managers for database operations.

- log_database_operation: timing/logging decorator for methods of
  objects exposing a ``logger`` attribute
- handle_db_errors: converts SQLAlchemy failures into DatabaseError
- validate_metadata: required-field check on a metadata payload
- DatabaseOperation: context manager combining the logging and the
  error conversion, used inside entity manager methods
"""
from __future__ import annotations

import time
from datetime import datetime
from functools import wraps
from types import TracebackType
from typing import Callable, List, Optional, Type

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from datanest.core.exceptions import DatabaseError, NotFoundError, ValidationError
from datanest.core.logging_manager import DatanestLogger, safe_logger
from datanest.core.validators import DataValidator

# Conditions callers are expected to handle; logged as warnings, not errors
EXPECTED_ERRORS = (ValidationError, NotFoundError)


def log_database_operation(operation_name: str):
    """
    Decorator to log database operations with timing and context.

    Args:
        operation_name: Name of the operation being logged

    Returns:
        Decorator function
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            start_time = datetime.now()
            operation_id = f"{operation_name}_{start_time.strftime('%Y%m%d_%H%M%S_%f')}"
            logger = safe_logger(getattr(self, "logger", None))

            logger.log_debug(
                f"Starting {operation_name}",
                {
                    "operation_id": operation_id,
                    "args_count": len(args),
                    "kwargs_keys": list(kwargs.keys()),
                },
            )

            try:
                result = function(self, *args, **kwargs)
            except Exception as e:
                duration = (datetime.now() - start_time).total_seconds()
                logger.log_error(
                    e,
                    {
                        "operation": operation_name,
                        "operation_id": operation_id,
                        "duration_seconds": duration,
                    },
                )
                raise

            duration = (datetime.now() - start_time).total_seconds()
            logger.log_operation(
                f"{operation_name}_completed",
                {
                    "operation_id": operation_id,
                    "duration_seconds": duration,
                    "success": True,
                },
            )
            return result

        return wrapper

    return decorator


def validate_metadata(required_fields: List[str]):
    """
    Decorator to validate metadata dictionaries before processing.

    The metadata is taken from the ``metadata`` keyword or, failing
    that, from the last positional argument.

    Args:
        required_fields: List of required field names

    Returns:
        Decorator function
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            metadata = kwargs.get("metadata", args[-1] if args else {})
            DataValidator.validate_required_fields(metadata or {}, required_fields)
            return function(self, *args, **kwargs)

        return wrapper

    return decorator


def handle_db_errors(function: Callable) -> Callable:
    """
    Decorator to handle common database errors.

    Args:
        function: Function to wrap

    Returns:
        Wrapped function raising DatabaseError for store failures
    """

    @wraps(function)
    def wrapper(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except IntegrityError as e:
            raise DatabaseError(f"Data integrity violation: {e.orig}") from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database operation failed: {e}") from e

    return wrapper


class DatabaseOperation:
    """
    Context manager wrapping a unit of database work.

    Logs completion with duration, logs failures with context, and turns
    SQLAlchemy exceptions into DatabaseError chained to the original.

    Usage:
        with DatabaseOperation(self.logger, "create_snippet"):
            snippet = Snippet(...)
            self.session.add(snippet)
            self.session.flush()
    """

    def __init__(
        self,
        logger: Optional[DatanestLogger],
        operation_name: str,
        log_start: bool = False,
    ) -> None:
        self.logger = safe_logger(logger)
        self.operation_name = operation_name
        self.log_start = log_start
        self._start: float = 0.0

    def __enter__(self) -> "DatabaseOperation":
        self._start = time.perf_counter()
        if self.log_start:
            self.logger.log_debug(f"Starting {self.operation_name}")
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> bool:
        duration = time.perf_counter() - self._start

        if exc_val is None:
            self.logger.log_operation(
                f"{self.operation_name}_completed",
                {"duration_seconds": duration, "success": True},
            )
            return False

        context = {"operation": self.operation_name, "duration_seconds": duration}

        if isinstance(exc_val, EXPECTED_ERRORS):
            self.logger.log_warning(f"{self.operation_name} rejected: {exc_val}", context)
            return False

        if not isinstance(exc_val, Exception):
            return False

        self.logger.log_error(exc_val, context)

        if isinstance(exc_val, IntegrityError):
            raise DatabaseError(f"Data integrity violation: {exc_val.orig}") from exc_val
        if isinstance(exc_val, SQLAlchemyError):
            raise DatabaseError(f"Database operation failed: {exc_val}") from exc_val

        return False
