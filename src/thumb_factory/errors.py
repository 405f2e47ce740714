"""Exception taxonomy for thumb_factory.

Codec failures are not represented here: Pillow's own exceptions
(``UnidentifiedImageError``, ``OSError``, ``ValueError``) reach the caller
unchanged.
"""

from __future__ import annotations

from collections.abc import Sequence


class ThumbError(Exception):
    """Base class for thumb_factory errors."""


class UnsupportedMimeTypeError(ThumbError):
    def __init__(self, mime: str | None):
        self.mime: str | None = mime
        super().__init__(f"Mime type {mime!r} is not supported")


class InvalidUploadDescriptorError(ThumbError):
    def __init__(self, missing: Sequence[str]):
        self.missing: tuple[str, ...] = tuple(missing)
        fields = ", ".join(f'"{field}"' for field in self.missing)
        super().__init__(f"Upload descriptor is missing required attributes: {fields}")


class InvalidNameProcessorError(ThumbError, TypeError):
    def __init__(self, processor: object):
        self.processor: object = processor
        super().__init__(
            "Name processor must be None, a callable taking a file name, "
            + f"or an object with a process_filename() method, got {type(processor).__name__}"
        )


class DegenerateImageError(ThumbError):
    def __init__(self, size: tuple[int, int]):
        self.size: tuple[int, int] = size
        super().__init__(f"Image has a degenerate size {size[0]}x{size[1]}")


class InvalidDimensionError(ThumbError, ValueError):
    def __init__(self, dimension: str, value: object):
        self.dimension: str = dimension
        self.value: object = value
        super().__init__(f"{dimension} must be a positive integer or None, got {value!r}")
