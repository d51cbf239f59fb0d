# thumbgallery/enums.py
"""
Enum definitions for thumbgallery.

Type-safe constants shared by the logger, the thumbnail pipeline and the
gallery routers.
"""

from enum import Enum


class LogLevel(str, Enum):
    """Log level constants for centralized logging system."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogSource(str, Enum):
    """Log source constants for identifying log origins."""

    API = "api"
    WORKER = "worker"
    SYSTEM = "system"
    PIPELINE = "pipeline"


class LogEmoji(str, Enum):
    """Type-safe emoji constants for log messages."""

    SUCCESS = "✅"
    FAILED = "❌"
    ERROR = "❌"
    WARNING = "⚠️"
    INFO = "ℹ️"
    DEBUG = "🐞"

    PROCESSING = "🔄"
    RUNNING = "▶️"
    STOPPED = "⏹️"

    STARTUP = "🚀"
    SHUTDOWN = "🛑"
    SYSTEM = "⚙️"

    IMAGE = "🖼️"
    FOLDER = "📁"
    WATCH = "👀"
    CHART = "📊"


class LoggerName(str, Enum):
    """Logger name constants for categorizing log entries."""

    SYSTEM = "system"
    API = "api"
    THUMBNAIL_PIPELINE = "thumbnail_pipeline"
    RECONCILER = "reconciler"
    DIRECTORY_WATCHER = "directory_watcher"
    THUMBNAIL_SYNC_WORKER = "thumbnail_sync_worker"


class ThumbnailErrorKind(str, Enum):
    """Why a thumbnail could not be produced."""

    DECODE = "decode"  # not an image, truncated, or unreadable source
    WRITE = "write"  # cache directory or file could not be written


class EntryKind(str, Enum):
    """Kinds of gallery entries presented by the listing endpoints."""

    FILE = "file"
    DIRECTORY = "directory"
