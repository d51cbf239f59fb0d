"""
Thumbnail Generation Components

- ThumbnailGenerator: 150px box WebP thumbnails for the cache tree
"""

from .thumbnail_generator import ThumbnailGenerator

__all__ = ["ThumbnailGenerator"]
