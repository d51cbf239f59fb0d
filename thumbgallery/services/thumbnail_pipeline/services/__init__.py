"""
Thumbnail Pipeline Services

- ReconcileService: startup pass generating missing thumbnails
- DirectoryWatchService: recursive creation notifications for the image tree
"""

from .reconcile_service import ReconcileService
from .watch_service import (
    CreationEventHandler,
    DirectoryWatchService,
    WatchEvent,
)

__all__ = [
    "ReconcileService",
    "DirectoryWatchService",
    "CreationEventHandler",
    "WatchEvent",
]
