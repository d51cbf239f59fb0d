"""
Logger Service Constants

Local constants for the logger service to avoid hardcoded values
and provide centralized configuration for logger-specific settings.
"""

# Console sink format (loguru markup)
CONSOLE_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[source]}</cyan>:<cyan>{extra[logger_name]}</cyan> - "
    "<level>{message}</level>"
)

# File sink format (plain text, no markup)
FILE_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{extra[source]}:{extra[logger_name]} | {name}:{function}:{line} - {message}"
)

# Defaults bound into every record so the formats never miss a key
DEFAULT_LOGGER_NAME = "-"
DEFAULT_LOG_SOURCE = "-"

# Context rendering
CONSOLE_MAX_CONTEXT_ITEMS = 3
CONSOLE_CONTEXT_INDENTATION = "  ↳ "
