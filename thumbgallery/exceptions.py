# thumbgallery/exceptions.py
"""
Custom exceptions for thumbgallery.

Centralized location for all custom exception classes to avoid
duplicating exception definitions across modules.
"""


class ThumbGalleryError(Exception):
    """Base exception for all thumbgallery-specific errors."""

    pass


class ConfigurationError(ThumbGalleryError):
    """Custom exception for configuration and validation errors."""

    pass


class ThumbnailDecodeError(ThumbGalleryError):
    """Source could not be read or decoded as an image. Never fatal."""

    pass


class ThumbnailWriteError(ThumbGalleryError):
    """Thumbnail could not be written to the cache tree."""

    pass


class WatchSubscriptionError(ThumbGalleryError):
    """The filesystem watch on the image root could not be established."""

    pass
