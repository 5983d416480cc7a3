from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from PIL import Image

KIB = 1024

JPEG_MIME_TYPE = "image/jpeg"


class FitMode(str, Enum):
    """
    How a source image is placed onto the fixed-size canvas.

    STRETCH maps the full source onto the full canvas (aspect ratio is NOT kept).
    COVER keeps aspect ratio and centre-crops the overflow.
    CONTAIN keeps aspect ratio and letterboxes with the background colour.
    """

    STRETCH = "stretch"
    COVER = "cover"
    CONTAIN = "contain"


@dataclass(frozen=True, slots=True)
class SourceImage:
    """
    Decoded source image. Consumed once by the normalizer and never mutated.
    """

    image: Image.Image
    width: int
    height: int
    source_format: str  # Pillow format name, or "PDF"
    source_sha256: str  # hex digest of the raw input bytes
    size_bytes: int
    decode_params: dict[str, Any] = field(default_factory=dict)  # backend id/version and decode options


@dataclass(frozen=True, slots=True)
class TargetSpec:
    """
    Output geometry and byte-size policy.

    `min_bytes` / `max_bytes` are informational bounds (never enforced by an error);
    `preferred_bytes` is the exact length produced whenever the baseline encode is smaller.
    """

    width: int
    height: int
    min_bytes: int
    max_bytes: int
    preferred_bytes: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be positive integers")
        if self.min_bytes <= 0:
            raise ValueError("min_bytes must be a positive integer")
        if not (self.min_bytes <= self.preferred_bytes <= self.max_bytes):
            raise ValueError("expected min_bytes <= preferred_bytes <= max_bytes")

    @classmethod
    def from_kib(cls, *, width: int, height: int, min_kib: int, max_kib: int, preferred_kib: int) -> "TargetSpec":
        return cls(
            width=width,
            height=height,
            min_bytes=min_kib * KIB,
            max_bytes=max_kib * KIB,
            preferred_bytes=preferred_kib * KIB,
        )

    @classmethod
    def default(cls) -> "TargetSpec":
        # 295x413 px is the common one-inch ID photo at 300 dpi.
        return cls.from_kib(width=295, height=413, min_kib=150, max_kib=250, preferred_kib=200)

    def within_window(self, size_bytes: int) -> bool:
        return self.min_bytes <= size_bytes <= self.max_bytes

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "min_bytes": self.min_bytes,
            "max_bytes": self.max_bytes,
            "preferred_bytes": self.preferred_bytes,
        }


@dataclass(frozen=True, slots=True)
class NormalizedRaster:
    """
    RGB pixel buffer at exactly the target dimensions.

    Owned by the encode stage that consumes it; discarded after encode.
    """

    image: Image.Image
    width: int
    height: int
    background: tuple[int, int, int]
    fit_mode: FitMode


@dataclass(frozen=True, slots=True)
class EncodedArtifact:
    """
    Final output bytes.

    The first `logical_image_length` bytes are a complete JPEG stream on their own;
    the remaining `padding_length` bytes are filler after the end-of-image marker.
    """

    data: bytes
    logical_image_length: int
    padding_length: int
    baseline_length: int  # length of the maximum-quality encode, before any policy applied
    quality: int
    within_window: bool
    mime_type: str = JPEG_MIME_TYPE

    def __post_init__(self) -> None:
        if self.logical_image_length + self.padding_length != len(self.data):
            raise ValueError("total length must equal logical_image_length + padding_length")

    @property
    def total_length(self) -> int:
        return len(self.data)

    @property
    def image_stream(self) -> bytes:
        return self.data[: self.logical_image_length]

    def to_dict(self) -> dict[str, Any]:
        """
        Manifest-safe representation (raw bytes are omitted).
        """

        return {
            "mime_type": self.mime_type,
            "total_length": self.total_length,
            "logical_image_length": self.logical_image_length,
            "padding_length": self.padding_length,
            "baseline_length": self.baseline_length,
            "quality": self.quality,
            "within_window": self.within_window,
        }
