"""
Background workers for thumbgallery.
"""

from .base_worker import BaseWorker
from .thumbnail_sync_worker import ThumbnailSyncWorker

__all__ = ["BaseWorker", "ThumbnailSyncWorker"]
