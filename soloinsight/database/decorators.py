#!/usr/bin/env python3
"""
decorators.py
--------------------
Shared decorators for storage and manager operations.
"""
from datetime import datetime
from functools import wraps
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError

from soloinsight.core.exceptions import SyncError


def log_database_operation(operation_name: str):
    """
    Decorator to log an operation with timing and context.

    The decorated method's instance must expose a `logger` attribute
    (which may be None).

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
            logger = getattr(self, "logger", None)

            if logger:
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
                if logger:
                    logger.log_error(
                        e,
                        {
                            "operation": operation_name,
                            "operation_id": operation_id,
                            "duration_seconds": (datetime.now() - start_time).total_seconds(),
                        },
                    )
                raise

            if logger:
                logger.log_operation(
                    f"{operation_name}_completed",
                    {
                        "operation_id": operation_id,
                        "duration_seconds": (datetime.now() - start_time).total_seconds(),
                        "success": True,
                    },
                )
            return result

        return wrapper

    return decorator


def handle_sync_errors(function: Callable) -> Callable:
    """
    Decorator converting remote store failures into SyncError.

    Any SQLAlchemy error on the remote connection (unreachable host,
    lock, dropped connection) is treated as lost connectivity.

    Args:
        function: Function to wrap

    Returns:
        Wrapped function with error handling
    """

    @wraps(function)
    def wrapper(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except SQLAlchemyError as e:
            raise SyncError(f"Remote store unreachable: {e}") from e

    return wrapper
