"""
Centralized Logger Service for thumbgallery.

Thin layer over loguru that provides:
- One-time sink configuration (console, optional rotating file)
- Service loggers pre-bound to a LoggerName and LogSource
- Emoji prefixes with a three-tier priority system
- Structured extra_context rendered beneath the message
"""

import sys
from typing import Any, Dict, Optional

from loguru import logger

from ...constants import LOG_FILE_COMPRESSION, LOG_FILE_RETENTION, LOG_FILE_ROTATION
from ...enums import LogEmoji, LoggerName, LogLevel, LogSource
from .constants import (
    CONSOLE_CONTEXT_INDENTATION,
    CONSOLE_LOG_FORMAT,
    CONSOLE_MAX_CONTEXT_ITEMS,
    DEFAULT_LOG_SOURCE,
    DEFAULT_LOGGER_NAME,
    FILE_LOG_FORMAT,
)

# Records logged straight through loguru still carry the keys the formats use
logger.configure(
    extra={"logger_name": DEFAULT_LOGGER_NAME, "source": DEFAULT_LOG_SOURCE}
)


def initialize_global_logger(
    level: LogLevel = LogLevel.INFO,
    log_file: Optional[str] = None,
    colorize: Optional[bool] = None,
) -> None:
    """
    Replace loguru's default sink with the application sinks.

    Safe to call more than once; every call resets the sinks.

    Args:
        level: Minimum level for all sinks
        log_file: Optional path of a rotating, compressed log file
        colorize: Force colour on/off (None lets loguru detect a TTY)
    """
    handlers = [
        {
            "sink": sys.stderr,
            "level": level.value,
            "format": CONSOLE_LOG_FORMAT,
            "colorize": colorize,
            "backtrace": False,
        }
    ]
    if log_file:
        handlers.append(
            {
                "sink": log_file,
                "level": level.value,
                "format": FILE_LOG_FORMAT,
                "rotation": LOG_FILE_ROTATION,
                "retention": LOG_FILE_RETENTION,
                "compression": LOG_FILE_COMPRESSION,
                "enqueue": True,
            }
        )

    logger.configure(
        handlers=handlers,
        extra={"logger_name": DEFAULT_LOGGER_NAME, "source": DEFAULT_LOG_SOURCE},
    )


def format_context(message: str, context: Optional[Dict[str, Any]]) -> str:
    """Append up to CONSOLE_MAX_CONTEXT_ITEMS context entries beneath a message."""
    if not context:
        return message

    lines = [message]
    for key, value in list(context.items())[:CONSOLE_MAX_CONTEXT_ITEMS]:
        lines.append(f"{CONSOLE_CONTEXT_INDENTATION}{key}: {value}")
    return "\n".join(lines)


class ServiceLogger:
    """
    Logger pre-configured for one service.

    Emoji priority system (highest to lowest):
    1. Direct: Emoji passed directly to log method call
    2. Instance-set: Default emoji set when creating the service logger
    3. Fallback: Default emoji based on log level
    """

    def __init__(
        self,
        logger_name: LoggerName,
        source: LogSource = LogSource.SYSTEM,
        default_emoji: Optional[LogEmoji] = None,
    ):
        self.logger_name = logger_name
        self.source = source
        self.default_emoji = default_emoji
        self._logger = logger.bind(logger_name=logger_name.value, source=source.value)

    def _resolve_emoji(
        self, method_emoji: Optional[LogEmoji], fallback_emoji: LogEmoji
    ) -> LogEmoji:
        if method_emoji is not None:
            return method_emoji
        if self.default_emoji is not None:
            return self.default_emoji
        return fallback_emoji

    def _emit(
        self,
        level: LogLevel,
        message: str,
        emoji: LogEmoji,
        context: Optional[Dict[str, Any]] = None,
        exception: Optional[BaseException] = None,
    ) -> None:
        text = format_context(f"{emoji.value} {message}", context)
        self._logger.opt(depth=2, exception=exception).bind(
            context=context or {}
        ).log(level.value, text)

    def error(
        self,
        message: str,
        exception: Optional[BaseException] = None,
        error_context: Optional[Dict[str, Any]] = None,
        emoji: Optional[LogEmoji] = None,
        extra_context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log an error, optionally with the exception's traceback."""
        self._emit(
            LogLevel.ERROR,
            message,
            self._resolve_emoji(emoji, LogEmoji.ERROR),
            error_context or extra_context,
            exception,
        )

    def warning(
        self,
        message: str,
        extra_context: Optional[Dict[str, Any]] = None,
        emoji: Optional[LogEmoji] = None,
    ) -> None:
        """Log a warning with emoji priority system."""
        self._emit(
            LogLevel.WARNING,
            message,
            self._resolve_emoji(emoji, LogEmoji.WARNING),
            extra_context,
        )

    def info(
        self,
        message: str,
        extra_context: Optional[Dict[str, Any]] = None,
        emoji: Optional[LogEmoji] = None,
    ) -> None:
        """Log an info message with emoji priority system."""
        self._emit(
            LogLevel.INFO,
            message,
            self._resolve_emoji(emoji, LogEmoji.INFO),
            extra_context,
        )

    def debug(
        self,
        message: str,
        extra_context: Optional[Dict[str, Any]] = None,
        emoji: Optional[LogEmoji] = None,
    ) -> None:
        """Log a debug message with emoji priority system."""
        self._emit(
            LogLevel.DEBUG,
            message,
            self._resolve_emoji(emoji, LogEmoji.DEBUG),
            extra_context,
        )


def get_service_logger(
    logger_name: LoggerName,
    source: LogSource = LogSource.SYSTEM,
    default_emoji: Optional[LogEmoji] = None,
) -> ServiceLogger:
    """
    Factory function to create a pre-configured logger for a specific service.

    Example:
        logger = get_service_logger(LoggerName.RECONCILER, LogSource.PIPELINE)
        logger.info("Startup pass complete", extra_context={"generated": 3})
    """
    return ServiceLogger(logger_name, source, default_emoji)
