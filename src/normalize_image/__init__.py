"""
Stage 0 - Raster Normalization (arbitrary image -> fixed-size RGB raster).

This package is intentionally limited to pixel geometry:
- It decodes the source (raster formats via Pillow, PDF scans via pypdfium2).
- It fills a fixed-size canvas with the background colour and draws the source onto it.
- It performs NO encoding and NO byte-size targeting.
"""

from .contracts import NormalizeImageConfig, ResampleFilter
from .module import decode_source_image, normalize_raster

__all__ = [
    "NormalizeImageConfig",
    "ResampleFilter",
    "decode_source_image",
    "normalize_raster",
]
