"""Thumb - ratio-aware thumbnail engine."""

from __future__ import annotations

import os
from collections.abc import Callable
from io import BytesIO
from os import PathLike
from pathlib import Path
from typing import Self

from loguru import logger
from PIL import Image

from .geometry import TargetSpec, TransformPlan, apply_plan, plan_transform
from .mime_registry import get_encoder
from .name_processor import NameProcessor, as_name_processor
from .settings import DEFAULT_SETTINGS, ThumbSettings
from .source import ResolvedSource, Source, SourceImage, resolve


class Thumb:
    """
    Scales and center-crops one source image to a requested size.

    The source image is decoded once and never modified. Every processing pass
    starts again from it, so changing the size and rendering again never
    accumulates transforms. The processed image is memoized until the size,
    the source or ``reset()`` invalidates it.

    Setters return the instance, so calls chain::

        Thumb.create("photo.jpg").set_size(200, 200).save("thumbs")
    """

    def __init__(self, source: Source, settings: ThumbSettings | None = None):
        self._settings: ThumbSettings = settings or DEFAULT_SETTINGS
        self._target: TargetSpec = TargetSpec()
        self._processor: Callable[[str], str] = as_name_processor(None)
        self._name_explicit: bool = False
        self._name: str | None = None
        self._original_name: str | None = None
        self._processed: Image.Image | None = None
        self._source: SourceImage
        _ = self.set_resource(source)

    @classmethod
    def create(cls, source: Source, settings: ThumbSettings | None = None) -> Self:
        return cls(source, settings)

    # ------------------------------------------------------------------
    # Source
    # ------------------------------------------------------------------

    def set_resource(self, source: Source) -> Self:
        """Replace the source image.

        The requested size is kept. The name is derived again from the new
        source, dropping any name set with :meth:`set_name`.
        """
        resolved: ResolvedSource = resolve(source)

        name = self._processed_name(self._processor, resolved.original_filename)

        self._source = resolved.image
        self._original_name = resolved.original_filename
        self._name = name
        self._name_explicit = False
        self._invalidate()
        return self

    @property
    def source(self) -> SourceImage:
        return self._source

    @property
    def mime(self) -> str:
        return self._source.mime

    @property
    def source_size(self) -> tuple[int, int]:
        return self._source.size

    @property
    def source_ratio(self) -> float:
        return self._source.ratio

    @property
    def settings(self) -> ThumbSettings:
        return self._settings

    # ------------------------------------------------------------------
    # Size
    # ------------------------------------------------------------------

    def set_width(self, width: int | None) -> Self:
        return self._set_target(TargetSpec(width, self._target.height))

    def set_height(self, height: int | None) -> Self:
        return self._set_target(TargetSpec(self._target.width, height))

    def set_size(self, width: int | None, height: int | None) -> Self:
        return self._set_target(TargetSpec(width, height))

    def reset(self) -> Self:
        """Forget the requested size; the output becomes the source as-is."""
        return self._set_target(TargetSpec())

    def _set_target(self, target: TargetSpec) -> Self:
        self._target = target
        self._invalidate()
        return self

    @property
    def width(self) -> int | None:
        return self._target.width

    @property
    def height(self) -> int | None:
        return self._target.height

    @property
    def ratio(self) -> float | None:
        return self._target.ratio

    # ------------------------------------------------------------------
    # Name
    # ------------------------------------------------------------------

    def set_name_processor(self, processor: NameProcessor) -> Self:
        """Set how the original file name becomes the saved name.

        The current original name is processed again right away, unless a
        name was set explicitly with :meth:`set_name`.

        Raises:
            InvalidNameProcessorError: If ``processor`` is not an accepted shape
        """
        candidate = as_name_processor(processor)
        if not self._name_explicit:
            self._name = self._processed_name(candidate, self._original_name)
        self._processor = candidate
        return self

    def set_name(self, name: str) -> Self:
        self._name = name
        self._name_explicit = True
        return self

    def get_name(self) -> str | None:
        return self._name

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def original_name(self) -> str | None:
        return self._original_name

    @staticmethod
    def _processed_name(
        processor: Callable[[str], str], original_name: str | None
    ) -> str | None:
        if original_name is None:
            return None
        return processor(original_name)

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def _invalidate(self) -> None:
        self._processed = None

    def _process_resource(self) -> Image.Image:
        if self._processed is not None:
            return self._processed

        plan = plan_transform(self._source.size, self._target)
        if plan.is_noop:
            logger.debug(f"{self._source.width}x{self._source.height} already matches target")
        else:
            logger.debug(
                f"Thumbnail {self._source.width}x{self._source.height} -> "
                + f"scale {plan.scale}, crop {plan.crop}, final {plan.size}"
            )

        self._processed = apply_plan(self._source.image, plan, self._settings.resample)
        return self._processed

    def plan(self) -> TransformPlan:
        """Scale/crop plan for the current size."""
        return plan_transform(self._source.size, self._target)

    def process(self) -> Image.Image:
        """Processed image as a new Pillow image the caller may modify."""
        return self._process_resource().copy()

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def render(self) -> bytes:
        """Encode the processed image in the source's format."""
        image = self._process_resource()
        buffer = BytesIO()
        get_encoder(self.mime)(image, buffer, self._settings)
        return buffer.getvalue()

    def save(self, path: str | PathLike[str] = "", name: str | None = None) -> Self:
        """Write the processed image to ``path/name``.

        ``path`` is created, with parents, if it does not exist. ``name``
        defaults to the resolved name of the image.

        Raises:
            ValueError: If no name was given and none could be resolved
        """
        image = self._process_resource()

        name = name if name is not None else self._name
        # Always relative to path
        name = name.lstrip("/") if name else name
        if not name:
            raise ValueError("No file name to save the thumbnail under")

        directory = os.fspath(path)
        if directory and not os.path.exists(directory):
            logger.debug(f"Creating thumbnail directory {directory}")
            os.makedirs(directory, mode=self._settings.directory_mode, exist_ok=True)

        full_path = Path(directory, name) if directory else Path(name)
        get_encoder(self.mime)(image, full_path, self._settings)
        logger.debug(f"Saved {self.mime} thumbnail to {full_path}")
        return self
