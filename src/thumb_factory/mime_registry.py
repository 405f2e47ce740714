"""Mime type => codec dispatch tables.

Each supported mime type maps to one decoder and one encoder. New formats are
added by registering entries here; nothing else branches on the mime type.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from os import PathLike
from types import MappingProxyType
from typing import IO

from PIL import Image

from .errors import UnsupportedMimeTypeError
from .settings import ThumbSettings

ImageSource = str | PathLike[str] | IO[bytes]
ImageTarget = str | PathLike[str] | IO[bytes]

Decoder = Callable[[ImageSource], Image.Image]
Encoder = Callable[[Image.Image, ImageTarget, ThumbSettings], None]


def _decoder(pil_format: str) -> Decoder:
    def decode(fp: ImageSource) -> Image.Image:
        with Image.open(fp, formats=[pil_format]) as img:
            img.load()
            # Detach from the underlying file
            return img.copy()

    decode.__name__ = f"decode_{pil_format.lower()}"
    return decode


def encode_jpeg(image: Image.Image, fp: ImageTarget, settings: ThumbSettings) -> None:
    # JPEG does not support alpha channel
    if image.mode not in ("RGB", "L", "CMYK"):
        image = image.convert("RGB")
    image.save(fp, format="JPEG", quality=settings.jpeg_quality)


def encode_png(image: Image.Image, fp: ImageTarget, settings: ThumbSettings) -> None:
    image.save(fp, format="PNG", optimize=settings.png_optimize)


def encode_bmp(image: Image.Image, fp: ImageTarget, settings: ThumbSettings) -> None:
    _ = settings
    image.save(fp, format="BMP")


def encode_gif(image: Image.Image, fp: ImageTarget, settings: ThumbSettings) -> None:
    _ = settings
    image.save(fp, format="GIF")


DECODERS: Mapping[str, Decoder] = MappingProxyType(
    {
        "image/jpeg": _decoder("JPEG"),
        "image/png": _decoder("PNG"),
        "image/bmp": _decoder("BMP"),
        "image/gif": _decoder("GIF"),
    }
)

ENCODERS: Mapping[str, Encoder] = MappingProxyType(
    {
        "image/jpeg": encode_jpeg,
        "image/png": encode_png,
        "image/bmp": encode_bmp,
        "image/gif": encode_gif,
    }
)

SUPPORTED_MIME_TYPES: frozenset[str] = frozenset(DECODERS)


def is_supported_mime(mime: str | None) -> bool:
    return mime is not None and mime in DECODERS and mime in ENCODERS


def get_decoder(mime: str | None) -> Decoder:
    if mime is None or mime not in DECODERS:
        raise UnsupportedMimeTypeError(mime)
    return DECODERS[mime]


def get_encoder(mime: str | None) -> Encoder:
    if mime is None or mime not in ENCODERS:
        raise UnsupportedMimeTypeError(mime)
    return ENCODERS[mime]
