"""Unit tests for mime type detection utilities.

Uses synthetic data (BytesIO) and small generated files.
"""

from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

from thumb_factory.utils.media_types import (
    DEFAULT_MIME,
    determine_file_mime,
    determine_mime,
    normalize_mime,
)


def _encoded(fmt: str) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (16, 16), color=(1, 2, 3)).save(buffer, fmt)
    return buffer.getvalue()


# ============================================================================
# normalize_mime Tests
# ============================================================================


def test_normalize_mime_aliases():
    assert normalize_mime("image/x-ms-bmp") == "image/bmp"
    assert normalize_mime("image/jpg") == "image/jpeg"
    assert normalize_mime("image/png") == "image/png"


def test_normalize_mime_strips_parameters_and_case():
    assert normalize_mime("Image/PNG; charset=binary") == "image/png"


def test_normalize_mime_passes_empty_through():
    assert normalize_mime(None) is None
    assert normalize_mime("") == ""


# ============================================================================
# determine_mime Tests
# ============================================================================


@pytest.mark.parametrize(
    "fmt, expected",
    [("JPEG", "image/jpeg"), ("PNG", "image/png"), ("GIF", "image/gif"), ("BMP", "image/bmp")],
)
def test_determine_mime_from_buffer(fmt: str, expected: str):
    assert determine_mime(BytesIO(_encoded(fmt))) == expected


def test_determine_mime_prefers_reported_type():
    bytes_io = BytesIO(_encoded("PNG"))

    assert determine_mime(bytes_io, "image/jpeg") == "image/jpeg"


def test_determine_mime_rewinds_buffer():
    bytes_io = BytesIO(_encoded("PNG"))
    _ = bytes_io.seek(0, 2)

    assert determine_mime(bytes_io) == "image/png"


def test_determine_mime_plain_text():
    assert determine_mime(BytesIO(b"hello world")) == "text/plain"


def test_determine_mime_empty_buffer_is_not_an_image():
    assert determine_mime(BytesIO(b"")) in (DEFAULT_MIME, "application/x-empty")


# ============================================================================
# determine_file_mime Tests
# ============================================================================


def test_determine_file_mime_ignores_extension(tmp_path: Path):
    path = tmp_path / "actually_png.jpg"
    _ = path.write_bytes(_encoded("PNG"))

    assert determine_file_mime(path) == "image/png"


def test_determine_file_mime_tiff(tmp_path: Path):
    path = tmp_path / "image.tiff"
    _ = path.write_bytes(_encoded("TIFF"))

    assert determine_file_mime(path) == "image/tiff"
