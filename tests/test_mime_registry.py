"""Unit tests for the mime type => codec dispatch tables."""

from collections.abc import Callable
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image, UnidentifiedImageError

from thumb_factory.errors import UnsupportedMimeTypeError
from thumb_factory.mime_registry import (
    DECODERS,
    ENCODERS,
    SUPPORTED_MIME_TYPES,
    get_decoder,
    get_encoder,
    is_supported_mime,
)
from thumb_factory.settings import DEFAULT_SETTINGS

MakeImage = Callable[..., Path]

MIME_EXT = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/bmp": "bmp",
    "image/gif": "gif",
}


def test_supported_mime_types():
    assert SUPPORTED_MIME_TYPES == {"image/jpeg", "image/png", "image/bmp", "image/gif"}
    assert set(DECODERS) == set(ENCODERS) == SUPPORTED_MIME_TYPES


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        DECODERS["image/tiff"] = DECODERS["image/png"]  # pyright: ignore[reportIndexIssue]


@pytest.mark.parametrize("mime", ["image/tiff", "image/webp", "text/plain", "", None])
def test_unsupported_mime(mime: str | None):
    assert not is_supported_mime(mime)

    with pytest.raises(UnsupportedMimeTypeError) as exc_info:
        _ = get_decoder(mime)
    assert exc_info.value.mime == mime

    with pytest.raises(UnsupportedMimeTypeError):
        _ = get_encoder(mime)


@pytest.mark.parametrize("mime", sorted(MIME_EXT))
def test_decoder_reads_path_and_stream(mime: str, make_image: MakeImage):
    path = make_image(64, 32, ext=MIME_EXT[mime])
    decode = get_decoder(mime)

    from_path = decode(path)
    from_stream = decode(BytesIO(path.read_bytes()))

    assert from_path.size == (64, 32)
    assert from_stream.size == (64, 32)


def test_decoder_rejects_other_formats(make_image: MakeImage):
    png_path = make_image(10, 10, ext="png")

    with pytest.raises(UnidentifiedImageError):
        _ = get_decoder("image/jpeg")(png_path)


def test_decoder_rejects_malformed_data():
    with pytest.raises(UnidentifiedImageError):
        _ = get_decoder("image/png")(BytesIO(b"definitely not a png"))


@pytest.mark.parametrize("mime", sorted(MIME_EXT))
def test_encoder_writes_format(mime: str, tmp_path: Path):
    image = Image.new("RGB", (20, 10), color=(0, 128, 255))
    buffer = BytesIO()

    get_encoder(mime)(image, buffer, DEFAULT_SETTINGS)

    _ = buffer.seek(0)
    with Image.open(buffer) as img:
        assert Image.MIME[img.format or ""] in (mime, "image/x-ms-bmp")
        assert img.size == (20, 10)

    out = tmp_path / f"out.{MIME_EXT[mime]}"
    get_encoder(mime)(image, out, DEFAULT_SETTINGS)
    assert out.exists()


def test_jpeg_encoder_drops_alpha():
    image = Image.new("RGBA", (8, 8), color=(255, 0, 0, 128))
    buffer = BytesIO()

    get_encoder("image/jpeg")(image, buffer, DEFAULT_SETTINGS)

    _ = buffer.seek(0)
    with Image.open(buffer) as img:
        assert img.format == "JPEG"
        assert img.mode == "RGB"
