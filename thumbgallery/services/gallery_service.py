# thumbgallery/services/gallery_service.py
"""
Gallery listing service.

Builds directory listings whose URLs match the static mounts: originals
under /static/images, thumbnails under the mirrored /static/thumbnails
path, sub-directories under /gallery with a placeholder icon. Thumbnail
existence is not checked; a missing one renders as a broken image.
"""

import os
from pathlib import Path, PurePosixPath
from typing import List, Union
from urllib.parse import quote

from ..constants import FOLDER_PLACEHOLDER_URL, GALLERY_URL_PREFIX
from ..enums import EntryKind, LoggerName, LogSource
from ..exceptions import ThumbGalleryError
from ..models.gallery_model import GalleryEntry, GalleryListing
from .logger import get_service_logger
from .thumbnail_pipeline.utils import is_within, original_url_for, thumbnail_url_for

logger = get_service_logger(LoggerName.API, LogSource.API)


class GalleryPathError(ThumbGalleryError):
    """Requested gallery path is outside the image root or not a directory."""

    pass


def _is_presentable(name: str) -> bool:
    """Names that are not valid UTF-8 on disk cannot be put into a URL."""
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def gallery_url_for(relative_path: Union[str, PurePosixPath]) -> str:
    """Gallery URL of a directory relative to the image root."""
    parts = PurePosixPath(relative_path).parts
    return "/".join([GALLERY_URL_PREFIX, *(quote(part) for part in parts)]) + (
        "" if parts else "/"
    )


def list_directory(image_root: Union[str, Path], relative_path: str = "") -> GalleryListing:
    """
    List one directory under the image root.

    Regular files and directories are listed, directories first and each
    group by name; symlinks and other kinds are omitted.

    Raises:
        GalleryPathError: Path escapes the image root or is not a directory
    """
    root = Path(image_root).expanduser().resolve()
    relative = PurePosixPath(relative_path.strip("/"))
    target = (root / relative).resolve()

    if not is_within(target, root) or not target.is_dir():
        raise GalleryPathError(f"No gallery at '{relative_path}'")

    entries: List[GalleryEntry] = []
    with os.scandir(target) as it:
        for entry in it:
            if not _is_presentable(entry.name):
                logger.debug(
                    f"Skipping entry with undecodable name {entry.name!r}",
                    extra_context={"directory": str(target)},
                )
                continue
            entry_path = relative / entry.name
            if entry.is_dir(follow_symlinks=False):
                entries.append(
                    GalleryEntry(
                        name=entry.name,
                        kind=EntryKind.DIRECTORY,
                        original=gallery_url_for(entry_path),
                        thumbnail=FOLDER_PLACEHOLDER_URL,
                    )
                )
            elif entry.is_file(follow_symlinks=False):
                entries.append(
                    GalleryEntry(
                        name=entry.name,
                        kind=EntryKind.FILE,
                        original=original_url_for(entry_path),
                        thumbnail=thumbnail_url_for(entry_path),
                    )
                )

    entries.sort(key=lambda e: (e.kind != EntryKind.DIRECTORY, e.name.casefold()))

    parts = relative.parts
    return GalleryListing(
        path=relative.as_posix() if parts else "",
        parent=gallery_url_for(relative.parent) if parts else None,
        images=entries,
    )
