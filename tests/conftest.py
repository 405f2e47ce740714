"""Test configuration and fixtures for thumb_factory.

This module provides:
- A factory writing synthetic images in every supported format
- Temporary output directories
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

PIL_FORMATS = {
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "png": "PNG",
    "bmp": "BMP",
    "gif": "GIF",
    "tiff": "TIFF",
}

MakeImage = Callable[..., Path]


# ============================================================================
# Function-Scoped Fixtures (Run Per Test)
# ============================================================================


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Path:
    """Provide clean temporary directory for test outputs."""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    return output_dir


@pytest.fixture
def make_image(tmp_path: Path) -> MakeImage:
    """Return a factory writing a synthetic image and returning its path.

    The image is split in a left red half and a right blue half, so crops can
    be told apart by sampling pixels.
    """

    def _make(
        width: int = 800,
        height: int = 600,
        ext: str = "png",
        name: str | None = None,
    ) -> Path:
        output_path = tmp_path / (name or f"source_{width}x{height}.{ext}")
        img = Image.new("RGB", (width, height), color=(255, 0, 0))
        draw = ImageDraw.Draw(img)
        draw.rectangle([width // 2, 0, width, height], fill=(0, 0, 255))
        img.save(output_path, PIL_FORMATS[ext])
        return output_path

    return _make

