"""
Stage 1 - Size-Targeting Encode (fixed-size raster -> JPEG bytes of a chosen length).

The stage never lowers fidelity to grow a file: it encodes once at maximum quality
and, when that is below the preferred size, appends inert filler after the JPEG
end-of-image marker until the preferred byte count is hit exactly.
"""

from .contracts import MAX_QUALITY, OversizePolicy, SizeTargetConfig
from .filler import filler_bytes, find_jpeg_end, pad_to_size
from .module import encode_baseline, encode_to_target, verify_trailing_data

__all__ = [
    "MAX_QUALITY",
    "OversizePolicy",
    "SizeTargetConfig",
    "encode_baseline",
    "encode_to_target",
    "filler_bytes",
    "find_jpeg_end",
    "pad_to_size",
    "verify_trailing_data",
]
