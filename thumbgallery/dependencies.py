# thumbgallery/dependencies.py
"""
FastAPI dependency providers.

The settings and the sync worker live on app.state, set by create_app()
and its lifespan, so tests can build an app around temporary directories.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request

from .config import Settings
from .workers.thumbnail_sync_worker import ThumbnailSyncWorker


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_sync_worker(request: Request) -> Optional[ThumbnailSyncWorker]:
    return getattr(request.app.state, "sync_worker", None)


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
SyncWorkerDep = Annotated[Optional[ThumbnailSyncWorker], Depends(get_sync_worker)]
