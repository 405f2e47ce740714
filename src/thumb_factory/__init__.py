"""thumb_factory - Ratio-aware image thumbnails (scale, then center-crop)."""

from .errors import (
    DegenerateImageError,
    InvalidDimensionError,
    InvalidNameProcessorError,
    InvalidUploadDescriptorError,
    ThumbError,
    UnsupportedMimeTypeError,
)
from .geometry import TargetSpec, TransformPlan, plan_transform
from .mime_registry import SUPPORTED_MIME_TYPES
from .name_processor import NameProcessor, ProcessesFilename
from .settings import DEFAULT_SETTINGS, ThumbSettings
from .source import ResolvedSource, SourceImage, UploadDescriptor, UploadLike, resolve
from .thumb import Thumb

__version__ = "0.1.0"

__all__ = [
    "Thumb",
    "ThumbSettings",
    "DEFAULT_SETTINGS",
    "TargetSpec",
    "TransformPlan",
    "plan_transform",
    "SourceImage",
    "ResolvedSource",
    "UploadDescriptor",
    "UploadLike",
    "resolve",
    "NameProcessor",
    "ProcessesFilename",
    "SUPPORTED_MIME_TYPES",
    "ThumbError",
    "UnsupportedMimeTypeError",
    "InvalidUploadDescriptorError",
    "InvalidNameProcessorError",
    "DegenerateImageError",
    "InvalidDimensionError",
    "__version__",
]
