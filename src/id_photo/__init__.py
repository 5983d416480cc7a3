"""
End-to-end ID photo pipeline: source bytes -> fixed-size JPEG of a preferred byte size.

Stages:
- Stage 0 `normalize_image`: decode + fixed-size raster
- Stage 1 `size_target`: maximum-quality JPEG + exact-size filler padding

The pipeline is a pure function of (input bytes, TargetSpec, stage configs);
persistence of the artifact is left to the caller (see `id_photo.artifacts`).
"""

from .contracts import IdPhotoError, IdPhotoResult
from .pipeline import GENERIC_FAILURE_MESSAGE, run_id_photo_pipeline, run_id_photo_pipeline_async

__all__ = [
    "GENERIC_FAILURE_MESSAGE",
    "IdPhotoError",
    "IdPhotoResult",
    "run_id_photo_pipeline",
    "run_id_photo_pipeline_async",
]
