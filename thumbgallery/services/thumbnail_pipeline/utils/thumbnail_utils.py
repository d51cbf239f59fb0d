# thumbgallery/services/thumbnail_pipeline/utils/thumbnail_utils.py
"""
Thumbnail Utility Functions
"""

import time
from pathlib import Path, PurePosixPath
from typing import Tuple, Union
from urllib.parse import quote

from ....constants import IMAGES_URL_PREFIX, THUMBNAILS_URL_PREFIX
from .constants import MAX_SETTLE_CHECKS, THUMBNAIL_EXTENSION

PathLike = Union[str, Path]


def map_to_cache_path(
    source_path: PathLike, image_root: PathLike, cache_root: PathLike
) -> Path:
    """
    Map a source image to its thumbnail location in the cache tree.

    The relative position under the image root is preserved and the
    extension is replaced with the cache format's extension, so
    ``<image_root>/photos/a.jpg`` maps to ``<cache_root>/photos/a.webp``.

    Args:
        source_path: Path of a file under image_root
        image_root: Root of the source tree
        cache_root: Root of the cache tree

    Returns:
        Path of the thumbnail

    Raises:
        ValueError: If source_path is not under image_root
    """
    relative = Path(source_path).relative_to(Path(image_root))
    return Path(cache_root) / relative.with_suffix(THUMBNAIL_EXTENSION)


def is_within(path: PathLike, root: PathLike) -> bool:
    """Whether path is root itself or lies somewhere beneath it."""
    path = Path(path)
    root = Path(root)
    return path == root or root in path.parents


def calculate_thumbnail_dimensions(
    source_size: Tuple[int, int], box_size: int
) -> Tuple[int, int]:
    """
    Calculate dimensions that fit a square box while preserving aspect ratio.

    The longer side becomes box_size and the shorter side scales
    proportionally (rounded, never below 1px). Images already inside the
    box keep their size: thumbnails are never upscaled.

    Args:
        source_size: (width, height) of source image
        box_size: Edge of the bounding box

    Returns:
        (width, height) of calculated thumbnail
    """
    source_width, source_height = source_size

    if source_width <= box_size and source_height <= box_size:
        return (source_width, source_height)

    if source_width >= source_height:
        new_width = box_size
        new_height = max(1, round(source_height * box_size / source_width))
    else:
        new_height = box_size
        new_width = max(1, round(source_width * box_size / source_height))

    return (new_width, new_height)


def _url_for(prefix: str, relative_path: PathLike) -> str:
    parts = PurePosixPath(Path(relative_path).as_posix()).parts
    return "/".join([prefix, *(quote(part) for part in parts)])


def original_url_for(relative_path: PathLike) -> str:
    """URL under which the serving layer exposes an original image."""
    return _url_for(IMAGES_URL_PREFIX, relative_path)


def thumbnail_url_for(relative_path: PathLike) -> str:
    """URL of the thumbnail mirrored from a source path relative to the image root."""
    return _url_for(
        THUMBNAILS_URL_PREFIX, Path(relative_path).with_suffix(THUMBNAIL_EXTENSION)
    )


def wait_for_stable_size(path: PathLike, settle_seconds: float) -> bool:
    """
    Block until a file's size stops changing.

    A creation notification can arrive while the writer is still filling
    the file; decoding at that point would fail as a truncated image.

    Args:
        path: File to watch
        settle_seconds: Interval the size must stay unchanged

    Returns:
        True once the size held still, False if the file disappeared or
        was still growing after MAX_SETTLE_CHECKS intervals
    """
    path = Path(path)
    try:
        stat = path.stat()
    except OSError:
        return False

    # Untouched for a full interval already (e.g. a backlog of queued events)
    if settle_seconds <= 0 or time.time() - stat.st_mtime >= settle_seconds:
        return True

    previous = stat.st_size

    for _ in range(MAX_SETTLE_CHECKS):
        time.sleep(settle_seconds)
        try:
            current = path.stat().st_size
        except OSError:
            return False
        if current == previous:
            return True
        previous = current

    return False
