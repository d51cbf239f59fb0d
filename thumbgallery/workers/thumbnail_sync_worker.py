# thumbgallery/workers/thumbnail_sync_worker.py
"""
Thumbnail Sync Worker.

Brings the cache tree up to date once at startup, then keeps it up to
date from filesystem creation events until stopped:

1. Subscribe to the image tree (before the startup pass by default, so
   files created while it runs are queued rather than missed)
2. Run the reconcile pass to completion
3. Consume watch events one at a time: first path only, wait for the
   file to settle, generate unconditionally (creation implies the
   thumbnail cannot be current)

stop() is the cancellation signal; the loop notices it within one poll
interval. If the watch ends (observer or emitter gone) the loop logs it
and ends, leaving the worker unhealthy.
"""

import asyncio
from pathlib import Path
from typing import Optional

from ..config import Settings
from ..constants import (
    DEFAULT_WATCH_POLL_INTERVAL_SECONDS,
    DEFAULT_WATCH_SETTLE_SECONDS,
    WORKER_STOP_TIMEOUT_SECONDS,
)
from ..enums import LogEmoji, LoggerName, LogSource
from ..models.shared_models import (
    ReconcileSummary,
    ThumbnailGenerationResult,
    ThumbnailSyncStatus,
)
from ..services.logger import get_service_logger
from ..services.thumbnail_pipeline import (
    DirectoryWatchService,
    ReconcileService,
    ThumbnailPipeline,
    WatchEvent,
    create_thumbnail_pipeline,
    is_within,
    wait_for_stable_size,
)
from .base_worker import BaseWorker

logger = get_service_logger(LoggerName.THUMBNAIL_SYNC_WORKER, LogSource.WORKER)


class ThumbnailSyncWorker(BaseWorker):
    """Startup reconciliation followed by an event-driven watch session."""

    def __init__(
        self,
        pipeline: ThumbnailPipeline,
        watch_service: Optional[DirectoryWatchService] = None,
        reconcile_service: Optional[ReconcileService] = None,
        poll_interval: float = DEFAULT_WATCH_POLL_INTERVAL_SECONDS,
        settle_seconds: float = DEFAULT_WATCH_SETTLE_SECONDS,
        watch_before_reconcile: bool = True,
    ):
        """
        Args:
            pipeline: Thumbnail pipeline for the image/cache tree pair
            watch_service: Creation watch on the image root
            reconcile_service: Startup pass over the image root
            poll_interval: Seconds between stop-signal and observer checks
            settle_seconds: How long a new file's size must hold still
            watch_before_reconcile: Subscribe before (True) or after the startup pass
        """
        super().__init__(name="ThumbnailSyncWorker")
        self.pipeline = pipeline
        self.watch_service = watch_service or DirectoryWatchService(pipeline.image_root)
        self.reconcile_service = reconcile_service or ReconcileService(pipeline)
        self.poll_interval = poll_interval
        self.settle_seconds = settle_seconds
        self.watch_before_reconcile = watch_before_reconcile

        self.watching = False
        self.last_reconcile: Optional[ReconcileSummary] = None
        self.events_received = 0
        self.thumbnails_generated = 0
        self.failures = 0
        self._task: Optional[asyncio.Task] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ThumbnailSyncWorker":
        """Build the worker and its collaborators from application settings."""
        pipeline = create_thumbnail_pipeline(settings)
        return cls(
            pipeline=pipeline,
            watch_service=DirectoryWatchService(
                pipeline.image_root, queue_size=settings.watch_queue_size
            ),
            poll_interval=settings.watch_poll_interval,
            settle_seconds=settings.watch_settle_seconds,
            watch_before_reconcile=settings.watch_before_reconcile,
        )

    async def initialize(self) -> None:
        """Subscribe and run the startup pass, in the configured order."""
        if self.watch_before_reconcile:
            self.watch_service.subscribe()

        self.last_reconcile = await self.run_in_executor(
            self.reconcile_service.reconcile
        )

        if not self.watch_before_reconcile:
            self.watch_service.subscribe()
        self.watching = True

    async def start(self) -> None:
        """Reconcile, then start the watch loop in the background."""
        try:
            await super().start()
        except Exception:
            self.running = False
            self.watch_service.close()
            raise

        self._task = asyncio.create_task(self.run())
        logger.info(
            "Thumbnail sync worker started",
            emoji=LogEmoji.STARTUP,
            extra_context={
                "image_root": str(self.pipeline.image_root),
                "cache_root": str(self.pipeline.cache_root),
                "pending_events": self.watch_service.pending,
            },
        )

    async def run(self) -> None:
        """Receive loop: one event at a time until stopped or the channel closes."""
        while self.running:
            event = await self.run_in_executor(
                self.watch_service.next_event, self.poll_interval
            )
            if not self.running:
                break

            if event is None:
                if not self.watch_service.is_alive:
                    logger.error(
                        "Filesystem notification channel closed; thumbnails will "
                        "no longer follow new files until restart",
                        emoji=LogEmoji.FAILED,
                        extra_context={"image_root": str(self.pipeline.image_root)},
                    )
                    self.watching = False
                    break
                continue

            try:
                await self.run_in_executor(self.process_event, event)
            except Exception as e:
                self.failures += 1
                logger.error(
                    "Unexpected error while processing watch event",
                    exception=e,
                    extra_context={"paths": list(event.paths)},
                )

    def process_event(self, event: WatchEvent) -> Optional[ThumbnailGenerationResult]:
        """
        Generate the thumbnail for a creation event.

        Returns:
            The generation result, or None if the event was ignored
        """
        self.events_received += 1
        if not event.paths:
            return None

        source = Path(event.paths[0])
        if is_within(source, self.pipeline.cache_root):
            return None

        if not wait_for_stable_size(source, self.settle_seconds):
            if source.exists():
                # No further creation event will arrive for this file
                logger.warning(
                    f"{source.name} was still being written when the settle "
                    "window ran out; skipped until the next startup pass",
                    extra_context={"source_path": str(source)},
                )
                self.failures += 1
            else:
                logger.debug(f"{source.name} vanished before it could be processed")
            return None

        if not source.is_file():
            return None

        logger.info(
            f"Creating thumbnail for newly found file {source.name}",
            emoji=LogEmoji.IMAGE,
        )
        result = self.pipeline.generate(source)
        if result.success:
            self.thumbnails_generated += 1
        else:
            self.failures += 1
        return result

    async def cleanup(self) -> None:
        """Close the watch and wait for the loop to wind down."""
        await self.run_in_executor(self.watch_service.close)

        if self._task is not None:
            try:
                await asyncio.wait_for(self._task, timeout=WORKER_STOP_TIMEOUT_SECONDS)
            except asyncio.TimeoutError:
                logger.warning("Watch loop did not stop in time; cancelling it")
                self._task.cancel()
            self._task = None

        self.watching = False
        logger.info(
            f"Final worker stats: {self.thumbnails_generated} generated, "
            f"{self.failures} failed, {self.events_received} events",
            emoji=LogEmoji.SHUTDOWN,
        )

    def is_healthy(self) -> bool:
        return self.running and self.watching

    def get_status(self) -> ThumbnailSyncStatus:
        return ThumbnailSyncStatus(
            name=self.name,
            running=self.running,
            watching=self.watching,
            healthy=self.is_healthy(),
            events_received=self.events_received,
            thumbnails_generated=self.thumbnails_generated,
            failures=self.failures,
            pending_events=self.watch_service.pending,
            last_reconcile=self.last_reconcile,
        )
