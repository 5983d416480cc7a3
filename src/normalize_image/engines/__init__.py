"""
Source decoding backends for Stage 0.

The public Stage 0 API lives in `normalize_image.module`.
"""

from .base import EngineDecodedImage, SourceDecoder
from .pillow_engine import PillowDecoder
from .pypdfium2_engine import Pypdfium2Decoder

__all__ = ["EngineDecodedImage", "SourceDecoder", "PillowDecoder", "Pypdfium2Decoder"]
