"""
Pydantic models for thumbgallery.
"""

from .gallery_model import GalleryEntry, GalleryListing
from .shared_models import (
    HealthResponse,
    ReconcileSummary,
    ThumbnailGenerationResult,
    ThumbnailSyncStatus,
)

__all__ = [
    "GalleryEntry",
    "GalleryListing",
    "HealthResponse",
    "ReconcileSummary",
    "ThumbnailGenerationResult",
    "ThumbnailSyncStatus",
]
