# thumbgallery/services/thumbnail_pipeline/thumbnail_pipeline.py
"""
Main Thumbnail Pipeline Class

Binds the path mapping to the generator for one (image root, cache root)
pair. Both the startup reconciler and the live watcher go through here,
so the two always agree on where a source's thumbnail lives.
"""

from pathlib import Path
from typing import Optional, Union

from ...enums import LoggerName, LogSource
from ...models.shared_models import ThumbnailGenerationResult
from ...services.logger import get_service_logger
from .generators import ThumbnailGenerator
from .utils.thumbnail_utils import map_to_cache_path

logger = get_service_logger(LoggerName.THUMBNAIL_PIPELINE, LogSource.PIPELINE)


class ThumbnailPipeline:
    """
    Thumbnail generation for one mirrored pair of directory trees.
    """

    def __init__(
        self,
        image_root: Union[str, Path],
        cache_root: Union[str, Path],
        generator: Optional[ThumbnailGenerator] = None,
    ):
        """
        Initialize thumbnail pipeline.

        Args:
            image_root: Root of the source image tree
            cache_root: Root of the thumbnail cache tree
            generator: Thumbnail generator (defaults to a standard one)
        """
        self.image_root = Path(image_root).expanduser().resolve()
        self.cache_root = Path(cache_root).expanduser().resolve()
        self.generator = generator or ThumbnailGenerator()

    def cache_path_for(self, source_path: Union[str, Path]) -> Path:
        """Thumbnail path mirrored from a source path under the image root."""
        return map_to_cache_path(source_path, self.image_root, self.cache_root)

    def generate(self, source_path: Union[str, Path]) -> ThumbnailGenerationResult:
        """
        Generate (or overwrite) the thumbnail for one source file.

        Intermediate cache directories are created as needed.
        """
        cache_path = self.cache_path_for(source_path)
        return self.generator.generate_thumbnail(source_path, cache_path)


def create_thumbnail_pipeline(settings) -> ThumbnailPipeline:
    """Build a pipeline from application settings."""
    return ThumbnailPipeline(
        image_root=settings.image_folder,
        cache_root=settings.thumbnail_folder,
        generator=ThumbnailGenerator(
            size=settings.thumbnail_size, quality=settings.thumbnail_quality
        ),
    )
