# thumbgallery/utils/router_helpers.py
"""
Router Helper Functions

Common decorators for FastAPI routers to reduce code duplication.
"""

from functools import wraps
from typing import Callable

from fastapi import HTTPException

from ..enums import LoggerName, LogSource
from ..services.logger import get_service_logger

logger = get_service_logger(LoggerName.API, LogSource.API)


def handle_exceptions(operation_name: str):
    """
    Decorator for standardized exception handling in router endpoints.

    HTTPExceptions pass through untouched; anything else is logged and
    turned into a 500 without leaking internals to the client.

    Args:
        operation_name: Human-readable description of the operation for error messages

    Usage:
        @handle_exceptions("list gallery")
        async def list_gallery():
            ...
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                logger.error(f"Error {operation_name}: {e}", exception=e)
                raise HTTPException(
                    status_code=500, detail=f"Failed to {operation_name}"
                )

        return wrapper

    return decorator
