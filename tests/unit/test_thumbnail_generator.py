#!/usr/bin/env python3
"""
Unit tests for ThumbnailGenerator.

Tests the core thumbnail generation functionality including:
- Fit-box geometry on real images
- WebP output and atomic writes
- Soft decode failures and recoverable write failures
"""

import pytest
from PIL import Image

from thumbgallery.enums import ThumbnailErrorKind
from thumbgallery.services.thumbnail_pipeline.generators.thumbnail_generator import (
    ThumbnailGenerator,
)


def _leftover_temp_files(directory):
    return [p for p in directory.rglob("*") if p.name.endswith(".tmp")]


@pytest.mark.unit
@pytest.mark.thumbnail
class TestThumbnailGenerator:
    """Test suite for ThumbnailGenerator component."""

    @pytest.fixture
    def thumbnail_generator(self):
        return ThumbnailGenerator()

    @pytest.fixture
    def output_dir(self, tmp_path):
        return tmp_path / "out"

    # ============================================================================
    # INITIALIZATION TESTS
    # ============================================================================

    def test_generator_initialization_defaults(self):
        generator = ThumbnailGenerator()
        assert generator.size == 150
        assert 1 <= generator.quality <= 100

    def test_generator_quality_bounds_clamping(self):
        assert ThumbnailGenerator(quality=0).quality == 1
        assert ThumbnailGenerator(quality=500).quality == 100

    # ============================================================================
    # THUMBNAIL GENERATION TESTS
    # ============================================================================

    def test_landscape_jpeg(self, thumbnail_generator, make_image, tmp_path, output_dir):
        source = make_image(tmp_path / "a.jpg", (800, 600), "JPEG")
        output = output_dir / "a.webp"

        result = thumbnail_generator.generate_thumbnail(source, output)

        assert result.success is True
        assert result.generated is True
        assert result.source_size == (800, 600)
        assert result.thumbnail_size == (150, 112)
        assert result.file_size == output.stat().st_size
        with Image.open(output) as img:
            assert img.format == "WEBP"
            assert img.size == (150, 112)

    def test_square_png(self, thumbnail_generator, make_image, tmp_path, output_dir):
        source = make_image(tmp_path / "b.png", (300, 300), "PNG")
        output = output_dir / "b.webp"

        result = thumbnail_generator.generate_thumbnail(source, output)

        assert result.success is True
        with Image.open(output) as img:
            assert img.size == (150, 150)

    def test_small_image_not_upscaled(
        self, thumbnail_generator, make_image, tmp_path, output_dir
    ):
        source = make_image(tmp_path / "tiny.png", (40, 20), "PNG")
        output = output_dir / "tiny.webp"

        result = thumbnail_generator.generate_thumbnail(source, output)

        assert result.success is True
        with Image.open(output) as img:
            assert img.size == (40, 20)

    def test_transparency_kept(self, thumbnail_generator, make_image, tmp_path, output_dir):
        source = make_image(
            tmp_path / "alpha.png", (400, 200), "PNG", mode="RGBA", color=(255, 0, 0, 128)
        )
        output = output_dir / "alpha.webp"

        result = thumbnail_generator.generate_thumbnail(source, output)

        assert result.success is True
        with Image.open(output) as img:
            assert img.mode == "RGBA"
            assert img.size == (150, 75)

    @pytest.mark.parametrize("mode, color", [("L", 128), ("P", 3), ("CMYK", (0, 0, 0, 0))])
    def test_other_modes_converted(
        self, thumbnail_generator, make_image, tmp_path, output_dir, mode, color
    ):
        fmt = "JPEG" if mode == "CMYK" else "PNG"
        source = make_image(tmp_path / f"{mode}.img", (300, 150), fmt, mode=mode, color=color)

        result = thumbnail_generator.generate_thumbnail(source, output_dir / f"{mode}.webp")

        assert result.success is True
        assert result.thumbnail_size == (150, 75)

    def test_creates_intermediate_directories(
        self, thumbnail_generator, make_image, tmp_path
    ):
        source = make_image(tmp_path / "a.jpg")
        output = tmp_path / "cache" / "x" / "y" / "z" / "a.webp"

        result = thumbnail_generator.generate_thumbnail(source, output)

        assert result.success is True
        assert output.is_file()

    def test_overwrites_existing_thumbnail(
        self, thumbnail_generator, make_image, tmp_path, output_dir
    ):
        source = make_image(tmp_path / "a.jpg", (800, 600))
        output = output_dir / "a.webp"
        output_dir.mkdir()
        output.write_bytes(b"stale")

        result = thumbnail_generator.generate_thumbnail(source, output)

        assert result.success is True
        with Image.open(output) as img:
            assert img.size == (150, 112)

    def test_no_temporary_files_left(
        self, thumbnail_generator, make_image, tmp_path, output_dir
    ):
        source = make_image(tmp_path / "a.jpg")
        thumbnail_generator.generate_thumbnail(source, output_dir / "a.webp")

        assert _leftover_temp_files(output_dir) == []
        assert [p.name for p in output_dir.iterdir()] == ["a.webp"]

    # ============================================================================
    # ERROR HANDLING TESTS
    # ============================================================================

    @pytest.mark.parametrize(
        "content",
        [b"", b"this is plain text, not pixels", b"\x89PNG\r\n\x1a\n" + b"\x00" * 16],
    )
    def test_undecodable_source_is_soft_failure(
        self, thumbnail_generator, tmp_path, output_dir, content
    ):
        source = tmp_path / "bad.jpg"
        source.write_bytes(content)
        output = output_dir / "bad.webp"

        result = thumbnail_generator.generate_thumbnail(source, output)

        assert result.success is False
        assert result.error_kind == ThumbnailErrorKind.DECODE
        assert not output.exists()

    def test_truncated_jpeg_is_soft_failure(
        self, thumbnail_generator, make_image, tmp_path, output_dir
    ):
        source = make_image(tmp_path / "full.jpg", (800, 600))
        data = source.read_bytes()
        source.write_bytes(data[: len(data) // 2])
        output = output_dir / "full.webp"

        result = thumbnail_generator.generate_thumbnail(source, output)

        assert result.success is False
        assert result.error_kind == ThumbnailErrorKind.DECODE
        assert not output.exists()

    def test_missing_source_is_soft_failure(self, thumbnail_generator, tmp_path, output_dir):
        result = thumbnail_generator.generate_thumbnail(
            tmp_path / "gone.jpg", output_dir / "gone.webp"
        )

        assert result.success is False
        assert result.error_kind == ThumbnailErrorKind.DECODE

    def test_directory_source_is_soft_failure(self, thumbnail_generator, tmp_path, output_dir):
        (tmp_path / "folder").mkdir()
        result = thumbnail_generator.generate_thumbnail(
            tmp_path / "folder", output_dir / "folder.webp"
        )

        assert result.success is False
        assert result.error_kind == ThumbnailErrorKind.DECODE

    def test_unwritable_destination_is_reported_not_raised(
        self, thumbnail_generator, make_image, tmp_path
    ):
        source = make_image(tmp_path / "a.jpg")
        blocker = tmp_path / "cache" / "blocked"
        blocker.parent.mkdir()
        blocker.write_text("a file where a directory should be")

        result = thumbnail_generator.generate_thumbnail(source, blocker / "a.webp")

        assert result.success is False
        assert result.error_kind == ThumbnailErrorKind.WRITE
        assert result.source_size == (800, 600)
        assert _leftover_temp_files(tmp_path / "cache") == []

