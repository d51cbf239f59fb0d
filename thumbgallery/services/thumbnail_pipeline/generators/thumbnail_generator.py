# thumbgallery/services/thumbnail_pipeline/generators/thumbnail_generator.py
"""
Thumbnail Generator Component

Turns one source image into a WebP thumbnail fitted into a square box.
Decode problems are expected (the image tree holds arbitrary files) and
come back as soft failures; write problems are logged and returned so a
single bad path never stops the caller's loop.
"""

import contextlib
import os
import time
import uuid
from pathlib import Path
from typing import Tuple, Union

from PIL import Image, ImageOps

from ....constants import MILLISECONDS_PER_SECOND
from ....enums import LoggerName, LogSource, ThumbnailErrorKind
from ....exceptions import ThumbnailDecodeError, ThumbnailWriteError
from ....models.shared_models import ThumbnailGenerationResult
from ....services.logger import get_service_logger
from ..utils.constants import (
    TEMP_FILE_PREFIX,
    TEMP_FILE_SUFFIX,
    THUMBNAIL_FORMAT,
    THUMBNAIL_QUALITY,
    THUMBNAIL_SIZE,
    THUMBNAIL_WEBP_METHOD,
    WEBP_NATIVE_MODES,
)
from ..utils.thumbnail_utils import calculate_thumbnail_dimensions

logger = get_service_logger(LoggerName.THUMBNAIL_PIPELINE, LogSource.PIPELINE)


class ThumbnailGenerator:
    """
    Component responsible for generating cache thumbnails.

    - Any format Pillow can decode is accepted
    - Aspect ratio preserved, longer side fitted to the box, never upscaled
    - Lanczos (3-lobe) resampling
    - WebP output written via a temporary file and an atomic rename
    """

    def __init__(self, size: int = THUMBNAIL_SIZE, quality: int = THUMBNAIL_QUALITY):
        """
        Initialize thumbnail generator.

        Args:
            size: Edge of the square box thumbnails are fitted into
            quality: WebP quality (1-100, default from constants)
        """
        self.size = size
        self.quality = max(1, min(100, quality))

        logger.debug(
            f"ThumbnailGenerator initialized (quality={self.quality}, size={self.size})"
        )

    def generate_thumbnail(
        self, source_path: Union[str, Path], output_path: Union[str, Path]
    ) -> ThumbnailGenerationResult:
        """
        Generate a thumbnail from a source image.

        An existing file at output_path is overwritten; deciding whether to
        call this at all is the caller's business.

        Args:
            source_path: Path to source file
            output_path: Path where thumbnail should be saved

        Returns:
            ThumbnailGenerationResult describing the outcome
        """
        started = time.perf_counter()
        source = Path(source_path)
        output = Path(output_path)

        try:
            thumbnail, source_size = self._decode_and_resize(source)
        except ThumbnailDecodeError as e:
            logger.debug(
                f"Skipping {source.name}: not a decodable image",
                extra_context={"source_path": str(source), "reason": str(e)},
            )
            return ThumbnailGenerationResult(
                success=False,
                source_path=str(source),
                output_path=str(output),
                error=str(e),
                error_kind=ThumbnailErrorKind.DECODE,
            )

        try:
            with thumbnail:
                file_size = self._write_atomically(thumbnail, output)
                thumbnail_size = thumbnail.size
        except ThumbnailWriteError as e:
            logger.error(
                f"Failed to write thumbnail for {source.name}",
                error_context={
                    "source_path": str(source),
                    "output_path": str(output),
                    "reason": str(e),
                },
            )
            return ThumbnailGenerationResult(
                success=False,
                source_path=str(source),
                output_path=str(output),
                error=str(e),
                error_kind=ThumbnailErrorKind.WRITE,
                source_size=source_size,
            )

        elapsed_ms = int((time.perf_counter() - started) * MILLISECONDS_PER_SECOND)
        logger.debug(f"Generated thumbnail: {output.name} ({elapsed_ms}ms)")

        return ThumbnailGenerationResult(
            success=True,
            generated=True,
            source_path=str(source),
            output_path=str(output),
            source_size=source_size,
            thumbnail_size=thumbnail_size,
            file_size=file_size,
            processing_time_ms=elapsed_ms,
        )

    def _decode_and_resize(self, source: Path) -> Tuple[Image.Image, Tuple[int, int]]:
        """
        Decode the source fully and return the resized image with the source size.

        Raises:
            ThumbnailDecodeError: Unreadable, missing, truncated or non-image input
        """
        try:
            with Image.open(source) as img:
                # Force full decode so truncated files fail here, not at save time
                img.load()
                oriented = ImageOps.exif_transpose(img)
                source_size = oriented.size

                if oriented.mode not in WEBP_NATIVE_MODES:
                    has_alpha = oriented.mode in ("LA", "PA", "RGBa", "La") or (
                        oriented.mode == "P" and "transparency" in oriented.info
                    )
                    oriented = oriented.convert("RGBA" if has_alpha else "RGB")

                target = calculate_thumbnail_dimensions(source_size, self.size)
                return oriented.resize(target, Image.Resampling.LANCZOS), source_size

        except Exception as e:
            raise ThumbnailDecodeError(f"{type(e).__name__}: {e}") from e

    def _write_atomically(self, thumbnail: Image.Image, output: Path) -> int:
        """
        Encode to a hidden temporary file beside output, then rename over it.

        Readers see either no file or a complete one, never a partial write.

        Returns:
            Size in bytes of the written thumbnail

        Raises:
            ThumbnailWriteError: Directory or file could not be created/written
        """
        temp_path = output.with_name(
            f"{TEMP_FILE_PREFIX}{output.name}.{uuid.uuid4().hex}{TEMP_FILE_SUFFIX}"
        )
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            thumbnail.save(
                temp_path,
                THUMBNAIL_FORMAT,
                quality=self.quality,
                method=THUMBNAIL_WEBP_METHOD,
            )
            os.replace(temp_path, output)
            return output.stat().st_size
        except (OSError, ValueError) as e:
            with contextlib.suppress(OSError):
                temp_path.unlink(missing_ok=True)
            raise ThumbnailWriteError(f"Could not write {output}: {e}") from e

