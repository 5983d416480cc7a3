"""
Canonical, authoritative pipeline contracts.

These models are the schema boundary between stages:
- Stage 0 (normalize_image): SourceImage -> NormalizedRaster
- Stage 1 (size_target): NormalizedRaster -> EncodedArtifact

Stage code should consume/produce these contract objects (not ad-hoc dicts).
"""

from .errors import AssemblyError, DecodeError, EncodeError, PhotoPipelineError, RenderError
from .photo import (
    JPEG_MIME_TYPE,
    KIB,
    EncodedArtifact,
    FitMode,
    NormalizedRaster,
    SourceImage,
    TargetSpec,
)

__all__ = [
    "KIB",
    "JPEG_MIME_TYPE",
    "FitMode",
    "SourceImage",
    "TargetSpec",
    "NormalizedRaster",
    "EncodedArtifact",
    "PhotoPipelineError",
    "DecodeError",
    "RenderError",
    "EncodeError",
    "AssemblyError",
]
