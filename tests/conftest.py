# tests/conftest.py
"""
Pytest configuration and shared fixtures for thumbgallery tests.
"""

from pathlib import Path
from typing import Tuple

import pytest
from PIL import Image

from thumbgallery.config import Settings
from thumbgallery.services.thumbnail_pipeline import ThumbnailPipeline


def write_image(
    path: Path,
    size: Tuple[int, int] = (800, 600),
    fmt: str = "JPEG",
    mode: str = "RGB",
    color=(200, 30, 30),
) -> Path:
    """Create a real image file, making parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new(mode, size, color=color).save(path, fmt)
    return path


@pytest.fixture
def make_image():
    """Factory for real image files on disk."""
    return write_image


@pytest.fixture
def roots(tmp_path):
    """Separate image, thumbnail and static roots under a temp directory."""
    image_root = tmp_path / "images"
    cache_root = tmp_path / "thumbnails"
    static_root = tmp_path / "static"
    for directory in (image_root, cache_root, static_root):
        directory.mkdir()
    return image_root, cache_root, static_root


@pytest.fixture
def settings(roots):
    """Settings pointing at the temp roots, ignoring any .env file."""
    image_root, cache_root, static_root = roots
    return Settings(
        image_folder=image_root,
        thumbnail_folder=cache_root,
        static_folder=static_root,
        watch_poll_interval=0.1,
        watch_settle_seconds=0.05,
        _env_file=None,
    )


@pytest.fixture
def pipeline(roots):
    """Pipeline over the temp image and thumbnail roots."""
    image_root, cache_root, _ = roots
    return ThumbnailPipeline(image_root, cache_root)


@pytest.fixture
def photo_tree(roots, make_image):
    """
    photos/a.jpg (800x600), photos/sub/b.png (300x300), photos/c.txt (text).
    """
    image_root, _, _ = roots
    make_image(image_root / "photos" / "a.jpg", (800, 600), "JPEG")
    make_image(image_root / "photos" / "sub" / "b.png", (300, 300), "PNG")
    (image_root / "photos" / "c.txt").write_text("not an image")
    return image_root
