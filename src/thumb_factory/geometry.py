"""Scale and crop planning.

Given the size of a source image and a requested width and/or height, work out
whether the image has to be scaled, cropped, both or neither:

1. If the source already has the requested size, nothing happens.
2. Otherwise the image is scaled, preserving its ratio, so that it covers the
   requested box. The width drives the scale when only a width is requested
   or when the requested box is relatively wider than the source; in every
   other case the scaled width is ``ceil(height * source_ratio)``.
3. If only one dimension was requested, or the requested ratio equals the
   source ratio, scaling alone is enough.
4. Otherwise the scaled image is center-cropped to exactly width x height,
   horizontally when the requested box is relatively narrower than the
   source, vertically when it is relatively taller.

Everything here is pure; :func:`apply_plan` is the only function touching
pixels.
"""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

from .errors import InvalidDimensionError

Size = tuple[int, int]
Box = tuple[int, int, int, int]


def _check_dimension(name: str, value: object) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidDimensionError(name, value)


@dataclass(frozen=True)
class TargetSpec:
    """Requested output size. Either dimension may be left open."""

    width: int | None = None
    height: int | None = None

    def __post_init__(self) -> None:
        _check_dimension("width", self.width)
        _check_dimension("height", self.height)

    @property
    def ratio(self) -> float | None:
        """``width / height``, defined only when both are set."""
        if self.width is None or self.height is None:
            return None
        return self.width / self.height


@dataclass(frozen=True)
class TransformPlan:
    """Operations turning the source into the thumbnail.

    Attributes:
        scale: Size to resize the source to, or None to keep it
        crop: Box ``(left, top, right, bottom)`` cut from the scaled image
        size: Final size of the thumbnail
    """

    scale: Size | None
    crop: Box | None
    size: Size

    @property
    def is_noop(self) -> bool:
        return self.scale is None and self.crop is None


def is_exact_size(size: Size, target: TargetSpec) -> bool:
    width, height = size
    return (target.width is None or width == target.width) and (
        target.height is None or height == target.height
    )


def is_exact_ratio(target: TargetSpec, source_ratio: float) -> bool:
    ratio = target.ratio
    return ratio is None or ratio == source_ratio


def scaled_size(source_size: Size, target: TargetSpec) -> Size:
    src_width, src_height = source_size
    source_ratio = src_width / src_height
    ratio = target.ratio

    if target.width is not None and (ratio is None or ratio > source_ratio):
        width = target.width
    elif target.height is not None:
        # ceil(height * source_ratio), in integers
        width = -(-target.height * src_width // src_height)
    else:
        raise ValueError("Cannot scale without a target width or height")

    height = max(1, round(width * src_height / src_width))
    return width, height


def crop_box(scaled: Size, target: TargetSpec, source_ratio: float) -> Box:
    ratio = target.ratio
    if target.width is None or target.height is None or ratio is None:
        raise ValueError("Cropping needs both a target width and height")

    scaled_width, scaled_height = scaled
    if ratio < source_ratio:
        left = (scaled_width - target.width) // 2
        return left, 0, left + target.width, target.height

    top = (scaled_height - target.height) // 2
    return 0, top, target.width, top + target.height


def plan_transform(source_size: Size, target: TargetSpec) -> TransformPlan:
    """Compute the scale and crop needed to reach ``target``."""
    if is_exact_size(source_size, target):
        return TransformPlan(scale=None, crop=None, size=source_size)

    scale = scaled_size(source_size, target)
    source_ratio = source_size[0] / source_size[1]
    if is_exact_ratio(target, source_ratio):
        return TransformPlan(scale=scale, crop=None, size=scale)

    box = crop_box(scale, target, source_ratio)
    return TransformPlan(scale=scale, crop=box, size=(box[2] - box[0], box[3] - box[1]))


def apply_plan(
    image: Image.Image,
    plan: TransformPlan,
    resample: Image.Resampling = Image.Resampling.BILINEAR,
) -> Image.Image:
    """Return a new image with ``plan`` applied; ``image`` is left untouched."""
    working = image.copy()
    if plan.scale is not None:
        working = working.resize(plan.scale, resample)
    if plan.crop is not None:
        working = working.crop(plan.crop)
    return working
