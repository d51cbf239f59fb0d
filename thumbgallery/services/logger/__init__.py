"""
Centralized Logger Service Module.

Usage:
    from thumbgallery.services.logger import get_service_logger
    from thumbgallery.enums import LoggerName, LogSource

    logger = get_service_logger(LoggerName.THUMBNAIL_PIPELINE, LogSource.PIPELINE)
    logger.info("Generated thumbnail", extra_context={"path": "a.webp"})
"""

# Re-export commonly used enums for convenience
from ...enums import LogEmoji, LoggerName, LogLevel, LogSource
from .logger_service import (
    ServiceLogger,
    format_context,
    get_service_logger,
    initialize_global_logger,
)

__all__ = [
    "ServiceLogger",
    "format_context",
    "get_service_logger",
    "initialize_global_logger",
    # Enums
    "LogLevel",
    "LogSource",
    "LoggerName",
    "LogEmoji",
]
