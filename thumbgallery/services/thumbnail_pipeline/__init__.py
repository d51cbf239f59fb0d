"""
Thumbnail Pipeline Module

Keeps the thumbnail cache tree in step with the image tree: a startup
reconciliation pass plus a live creation watch, both feeding a single
WebP thumbnail generator.
"""

from .generators import ThumbnailGenerator
from .services import (
    CreationEventHandler,
    DirectoryWatchService,
    ReconcileService,
    WatchEvent,
)
from .thumbnail_pipeline import ThumbnailPipeline, create_thumbnail_pipeline
from .utils import (
    THUMBNAIL_EXTENSION,
    THUMBNAIL_FORMAT,
    THUMBNAIL_QUALITY,
    THUMBNAIL_SIZE,
    calculate_thumbnail_dimensions,
    is_within,
    map_to_cache_path,
    original_url_for,
    thumbnail_url_for,
    wait_for_stable_size,
)

__all__ = [
    # Main pipeline
    "ThumbnailPipeline",
    "create_thumbnail_pipeline",
    # Services
    "ReconcileService",
    "DirectoryWatchService",
    "CreationEventHandler",
    "WatchEvent",
    # Generators
    "ThumbnailGenerator",
    # Utils
    "calculate_thumbnail_dimensions",
    "is_within",
    "map_to_cache_path",
    "original_url_for",
    "thumbnail_url_for",
    "wait_for_stable_size",
    # Constants
    "THUMBNAIL_EXTENSION",
    "THUMBNAIL_FORMAT",
    "THUMBNAIL_QUALITY",
    "THUMBNAIL_SIZE",
]
