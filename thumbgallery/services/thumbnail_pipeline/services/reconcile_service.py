# thumbgallery/services/thumbnail_pipeline/services/reconcile_service.py
"""
Thumbnail Reconcile Service - startup pass that fills in missing thumbnails.

The existence of a thumbnail is the only "already generated" signal: a
source whose content changed after its thumbnail was made is not
regenerated here.
"""

import os
import time
from pathlib import Path
from typing import Dict, List, Optional, Union

from ....constants import MILLISECONDS_PER_SECOND
from ....enums import LogEmoji, LoggerName, LogSource
from ....models.shared_models import ReconcileSummary
from ....services.logger import get_service_logger
from ..thumbnail_pipeline import ThumbnailPipeline

logger = get_service_logger(LoggerName.RECONCILER, LogSource.PIPELINE)


class ReconcileService:
    """Walks the image tree once and generates every missing thumbnail."""

    def __init__(self, pipeline: ThumbnailPipeline):
        self.pipeline = pipeline

    def reconcile(
        self, image_root: Optional[Union[str, Path]] = None
    ) -> ReconcileSummary:
        """
        Depth-first pass over image_root (default: the pipeline's image root).

        Directories are descended into, regular files without a thumbnail
        are handed to the generator, everything else (symlinks, sockets,
        fifos) is ignored. Per-file failures are counted, never raised.

        Within one pass the first source to claim a cache path wins; later
        sources mapping to the same path are logged as collisions.

        Args:
            image_root: Directory to walk; must lie under the pipeline's root

        Returns:
            ReconcileSummary with counters for the pass
        """
        started = time.perf_counter()
        root = (
            Path(image_root).expanduser().resolve()
            if image_root is not None
            else self.pipeline.image_root
        )
        summary = ReconcileSummary(image_root=str(root))
        claimed: Dict[Path, Path] = {}

        logger.info(
            f"Reconciling thumbnails under {root}",
            emoji=LogEmoji.PROCESSING,
            extra_context={"cache_root": str(self.pipeline.cache_root)},
        )

        stack: List[Path] = [root]
        while stack:
            directory = stack.pop()
            try:
                with os.scandir(directory) as it:
                    entries = list(it)
            except OSError as e:
                summary.unreadable_directories += 1
                logger.warning(
                    f"Cannot read directory {directory}: {e}",
                    extra_context={"directory": str(directory)},
                )
                continue

            summary.directories_scanned += 1
            subdirectories = []
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        subdirectories.append(Path(entry.path))
                        continue
                    if not entry.is_file(follow_symlinks=False):
                        continue
                except OSError:
                    continue
                self._reconcile_file(Path(entry.path), summary, claimed)

            # Reversed so the stack pops sub-directories in listing order
            stack.extend(reversed(subdirectories))

        summary.elapsed_ms = int(
            (time.perf_counter() - started) * MILLISECONDS_PER_SECOND
        )
        logger.info(
            f"Reconciliation finished: {summary.generated} generated, "
            f"{summary.skipped_existing} up to date, {summary.failed} failed",
            emoji=LogEmoji.CHART,
            extra_context={
                "files_scanned": summary.files_scanned,
                "collisions": summary.collisions,
                "elapsed_ms": summary.elapsed_ms,
            },
        )
        return summary

    def _reconcile_file(
        self, source: Path, summary: ReconcileSummary, claimed: Dict[Path, Path]
    ) -> None:
        summary.files_scanned += 1
        cache_path = self.pipeline.cache_path_for(source)

        if cache_path in claimed:
            summary.collisions += 1
            logger.warning(
                f"{source.name} maps to the same thumbnail as {claimed[cache_path].name}; keeping the first",
                extra_context={
                    "source_path": str(source),
                    "claimed_by": str(claimed[cache_path]),
                    "cache_path": str(cache_path),
                },
            )
            return

        if cache_path.exists():
            summary.skipped_existing += 1
            claimed[cache_path] = source
            return

        result = self.pipeline.generator.generate_thumbnail(source, cache_path)
        summary.record(result)
        if result.success:
            claimed[cache_path] = source
