"""Engine configuration."""

from typing import ClassVar

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field


class ThumbSettings(BaseModel):
    """Static configuration shared by engine instances.

    Attributes:
        resample: Pillow filter used by the scale step
        jpeg_quality: Quality passed to the JPEG encoder
        png_optimize: Whether the PNG encoder runs its optimizer
        directory_mode: Permission bits for directories created by ``save``
    """

    resample: Image.Resampling = Field(
        default=Image.Resampling.BILINEAR,
        description="Resampling filter used when scaling",
    )
    jpeg_quality: int = Field(
        default=75,
        ge=1,
        le=95,
        description="JPEG encoder quality",
    )
    png_optimize: bool = Field(
        default=True,
        description="Run the PNG optimizer when encoding",
    )
    directory_mode: int = Field(
        default=0o777,
        ge=0,
        le=0o7777,
        description="Mode for directories created while saving",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)


DEFAULT_SETTINGS = ThumbSettings()
