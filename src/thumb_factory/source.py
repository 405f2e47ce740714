"""Image source resolution.

Turns one of the accepted input shapes into a decoded, immutable source image
plus the original file name the input was known under:

- an upload object (``filename``, ``content_type`` and a binary ``file``,
  e.g. FastAPI's ``UploadFile``)
- an upload descriptor mapping with ``name`` and ``temp_path`` (or
  ``tmp_name``)
- a filesystem path
- raw bytes or a binary stream
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from io import BytesIO
from os import PathLike
from pathlib import PurePosixPath
from typing import IO, ClassVar, Protocol, runtime_checkable

from loguru import logger
from PIL import Image
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from .errors import (
    DegenerateImageError,
    InvalidUploadDescriptorError,
    UnsupportedMimeTypeError,
)
from .mime_registry import ImageSource, get_decoder, is_supported_mime
from .utils.media_types import determine_file_mime, determine_mime, normalize_mime


@runtime_checkable
class UploadLike(Protocol):
    """Uploaded file carrying client-reported metadata."""

    filename: str | None
    content_type: str | None
    file: IO[bytes]


class UploadDescriptor(BaseModel):
    """Raw upload descriptor: client file name plus server-side temp path."""

    name: str = Field(..., min_length=1)
    temp_path: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("temp_path", "tmp_name"),
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore", frozen=True)


Source = UploadLike | Mapping[str, object] | bytes | bytearray | str | PathLike[str] | IO[bytes]


@dataclass(frozen=True)
class SourceImage:
    """Decoded original image. Never modified after construction."""

    image: Image.Image
    mime: str
    ratio: float

    @classmethod
    def from_image(cls, image: Image.Image, mime: str) -> SourceImage:
        width, height = image.size
        if width <= 0 or height <= 0:
            raise DegenerateImageError((width, height))
        return cls(image=image, mime=mime, ratio=width / height)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size


@dataclass(frozen=True)
class ResolvedSource:
    image: SourceImage
    original_filename: str | None


def basename(path: str | PathLike[str]) -> str:
    """Last path segment, treating backslashes as separators too."""
    return PurePosixPath(str(path).replace("\\", "/")).name


def _decode(fp: ImageSource, mime: str | None) -> SourceImage:
    if mime is None or not is_supported_mime(mime):
        logger.warning(f"Rejecting source with unsupported mime type: {mime}")
        raise UnsupportedMimeTypeError(mime)
    image = get_decoder(mime)(fp)
    return SourceImage.from_image(image, mime)


def _read_stream(stream: IO[bytes]) -> BytesIO:
    if stream.seekable():
        _ = stream.seek(0)
    return BytesIO(stream.read())


def resolve_upload(upload: UploadLike) -> ResolvedSource:
    buffer = _read_stream(upload.file)
    mime = determine_mime(buffer, normalize_mime(upload.content_type))
    _ = buffer.seek(0)
    return ResolvedSource(_decode(buffer, mime), upload.filename or None)


def resolve_descriptor(data: Mapping[str, object]) -> ResolvedSource:
    try:
        descriptor = UploadDescriptor.model_validate(dict(data))
    except ValidationError as exc:
        missing = [str(error["loc"][0]) for error in exc.errors() if error["loc"]]
        raise InvalidUploadDescriptorError(missing or ["name", "temp_path"]) from exc

    mime = determine_file_mime(descriptor.temp_path)
    return ResolvedSource(_decode(descriptor.temp_path, mime), descriptor.name)


def resolve_path(path: str | PathLike[str]) -> ResolvedSource:
    mime = determine_file_mime(path)
    return ResolvedSource(_decode(path, mime), basename(path))


def resolve_stream(stream: IO[bytes] | bytes | bytearray) -> ResolvedSource:
    if isinstance(stream, (bytes, bytearray)):
        buffer = BytesIO(bytes(stream))
        name = None
    else:
        buffer = _read_stream(stream)
        raw_name = getattr(stream, "name", None)
        name = basename(raw_name) if isinstance(raw_name, str) and raw_name else None

    mime = determine_mime(buffer)
    _ = buffer.seek(0)
    return ResolvedSource(_decode(buffer, mime), name)


def resolve(source: Source) -> ResolvedSource:
    """Decode ``source`` and work out the name it was known under.

    Raises:
        UnsupportedMimeTypeError: If the detected mime type has no codec
        InvalidUploadDescriptorError: If a descriptor lacks name or temp path
        DegenerateImageError: If the decoded image has a zero dimension
        TypeError: If ``source`` is none of the accepted shapes
    """
    if isinstance(source, UploadLike):
        resolved = resolve_upload(source)
    elif isinstance(source, Mapping):
        resolved = resolve_descriptor(source)
    elif isinstance(source, (bytes, bytearray)):
        resolved = resolve_stream(source)
    elif isinstance(source, (str, PathLike)):
        resolved = resolve_path(source)
    elif hasattr(source, "read"):
        resolved = resolve_stream(source)
    else:
        raise TypeError(f"Unsupported image source: {type(source).__name__}")

    logger.debug(
        f"Resolved {resolved.image.mime} source "
        + f"{resolved.image.width}x{resolved.image.height} "
        + f"named {resolved.original_filename!r}"
    )
    return resolved
