# thumbgallery/models/shared_models.py
"""
Pydantic models shared between the thumbnail pipeline, the sync worker
and the API layer.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from ..enums import ThumbnailErrorKind


class ThumbnailGenerationResult(BaseModel):
    """Result of a single thumbnail generation attempt"""

    success: bool
    generated: bool = False
    source_path: str
    output_path: str
    error: Optional[str] = None
    error_kind: Optional[ThumbnailErrorKind] = None
    source_size: Optional[Tuple[int, int]] = None
    thumbnail_size: Optional[Tuple[int, int]] = None
    file_size: Optional[int] = None
    processing_time_ms: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class ReconcileSummary(BaseModel):
    """Counters collected by one startup reconciliation pass"""

    image_root: str
    directories_scanned: int = 0
    unreadable_directories: int = 0
    files_scanned: int = 0
    generated: int = 0
    skipped_existing: int = 0
    decode_failures: int = 0
    write_failures: int = 0
    collisions: int = 0
    elapsed_ms: int = 0

    @property
    def failed(self) -> int:
        return self.decode_failures + self.write_failures

    def record(self, result: ThumbnailGenerationResult) -> None:
        """Fold one codec result into the counters."""
        if result.success:
            self.generated += 1
        elif result.error_kind == ThumbnailErrorKind.WRITE:
            self.write_failures += 1
        else:
            self.decode_failures += 1


class ThumbnailSyncStatus(BaseModel):
    """Status snapshot of the thumbnail sync worker"""

    name: str
    running: bool
    watching: bool
    healthy: bool
    events_received: int = 0
    thumbnails_generated: int = 0
    failures: int = 0
    pending_events: int = 0
    last_reconcile: Optional[ReconcileSummary] = None


class HealthResponse(BaseModel):
    """Service health as reported by GET /health"""

    status: str
    thumbnail_sync: Optional[ThumbnailSyncStatus] = None
