"""
Thumbnail Pipeline Utilities
"""

from .constants import (
    THUMBNAIL_EXTENSION,
    THUMBNAIL_FORMAT,
    THUMBNAIL_QUALITY,
    THUMBNAIL_SIZE,
)
from .thumbnail_utils import (
    calculate_thumbnail_dimensions,
    is_within,
    map_to_cache_path,
    original_url_for,
    thumbnail_url_for,
    wait_for_stable_size,
)

__all__ = [
    "THUMBNAIL_EXTENSION",
    "THUMBNAIL_FORMAT",
    "THUMBNAIL_QUALITY",
    "THUMBNAIL_SIZE",
    "calculate_thumbnail_dimensions",
    "is_within",
    "map_to_cache_path",
    "original_url_for",
    "thumbnail_url_for",
    "wait_for_stable_size",
]
