from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from PIL import Image

from contracts.photo import FitMode


class ResampleFilter(str, Enum):
    NEAREST = "nearest"
    BILINEAR = "bilinear"
    BICUBIC = "bicubic"
    LANCZOS = "lanczos"

    def to_pillow(self) -> Image.Resampling:
        return Image.Resampling[self.name]


@dataclass(frozen=True, slots=True)
class NormalizeImageConfig:
    """
    Stage 0 configuration.

    Data access rule:
    - all inputs are passed explicitly (raw bytes in, raster out)
    - no environment variable reads in this module
    - no implicit output directories
    """

    background: tuple[int, int, int] = (255, 255, 255)
    fit_mode: FitMode = FitMode.STRETCH
    resample: ResampleFilter = ResampleFilter.LANCZOS
    apply_exif_orientation: bool = True
    pdf_dpi: int = 300
    pdf_page_num: int = 1  # 1-indexed

    def __post_init__(self) -> None:
        if len(self.background) != 3 or any(not 0 <= int(c) <= 255 for c in self.background):
            raise ValueError("background must be an (r, g, b) tuple with components in 0..255")
        if self.pdf_dpi <= 0:
            raise ValueError("pdf_dpi must be a positive integer")
        if self.pdf_page_num < 1:
            raise ValueError("pdf_page_num must be >= 1")
