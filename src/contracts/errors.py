from __future__ import annotations

from typing import Any


class PhotoPipelineError(Exception):
    """
    Base class for terminal pipeline failures.

    Every failure aborts the current invocation as a whole; nothing is retried.
    """

    code = "PHOTO_PIPELINE_FAILED"
    stage = "pipeline"

    def __init__(self, message: str, *, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class DecodeError(PhotoPipelineError):
    """The input is not a valid or supported raster image."""

    code = "PHOTO_DECODE_FAILED"
    stage = "decode"


class RenderError(PhotoPipelineError):
    """The normalization canvas could not be created or drawn."""

    code = "PHOTO_RENDER_FAILED"
    stage = "normalize"


class EncodeError(PhotoPipelineError):
    """The JPEG encoder produced no usable output."""

    code = "PHOTO_ENCODE_FAILED"
    stage = "encode"


class AssemblyError(PhotoPipelineError):
    """The padded output could not be built, or did not survive a decode check."""

    code = "PHOTO_ASSEMBLY_FAILED"
    stage = "assemble"
