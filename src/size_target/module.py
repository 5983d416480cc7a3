from __future__ import annotations

import io
import logging

from PIL import Image, UnidentifiedImageError

from contracts.errors import AssemblyError, EncodeError
from contracts.photo import EncodedArtifact, NormalizedRaster, TargetSpec

from .contracts import MAX_QUALITY, OversizePolicy, SizeTargetConfig
from .filler import find_jpeg_end, pad_to_size

logger = logging.getLogger(__name__)


def _encode_jpeg(raster: NormalizedRaster, *, quality: int) -> bytes:
    if raster.width <= 0 or raster.height <= 0:
        raise EncodeError("Cannot encode a zero-area raster", detail={"width": raster.width, "height": raster.height})

    buf = io.BytesIO()
    try:
        # 4:4:4 sampling, no EXIF/ICC, baseline (non-progressive), no optimize:
        # output depends only on the pixels and the quality.
        raster.image.save(
            buf,
            format="JPEG",
            quality=quality,
            subsampling=0,
            optimize=False,
            progressive=False,
        )
    except (OSError, ValueError, MemoryError) as e:
        raise EncodeError(
            "JPEG encoder failed",
            detail={"quality": quality, "mode": raster.image.mode, "error": repr(e)},
        ) from e

    data = buf.getvalue()
    if not data:
        raise EncodeError("JPEG encoder produced no output", detail={"quality": quality})
    if find_jpeg_end(data) != len(data):
        raise EncodeError("JPEG encoder output does not end with an end-of-image marker", detail={"quality": quality})
    return data


def encode_baseline(raster: NormalizedRaster) -> bytes:
    """
    Encode at maximum fidelity (quality 100, no chroma subsampling).
    """

    return _encode_jpeg(raster, quality=MAX_QUALITY)


def _search_quality(raster: NormalizedRaster, *, ceiling_bytes: int, min_quality: int) -> tuple[int, bytes]:
    """
    Binary-search JPEG quality for the highest setting whose encode is <= ceiling_bytes.

    Falls back to `min_quality` when no setting fits.
    """

    lo, hi = min_quality, MAX_QUALITY - 1
    best: tuple[int, bytes] | None = None

    while lo <= hi:
        mid = (lo + hi) // 2
        data = _encode_jpeg(raster, quality=mid)
        logger.debug("quality search q=%d size=%d ceiling=%d", mid, len(data), ceiling_bytes)
        if len(data) <= ceiling_bytes:
            best = (mid, data)
            lo = mid + 1
        else:
            hi = mid - 1

    if best is None:
        fallback = _encode_jpeg(raster, quality=min_quality)
        logger.warning(
            "No JPEG quality >= %d fits %d bytes; using quality=%d (%d bytes)",
            min_quality,
            ceiling_bytes,
            min_quality,
            len(fallback),
        )
        return min_quality, fallback
    return best


def _decode_pixels(data: bytes) -> tuple[tuple[int, int], bytes]:
    with Image.open(io.BytesIO(data)) as im:
        im.load()
        return im.size, im.tobytes()


def verify_trailing_data(*, stream: bytes, padded: bytes) -> None:
    """
    Check that the decoder ignores the filler: `padded` must decode to the same pixels as `stream`.
    """

    try:
        expected = _decode_pixels(stream)
        actual = _decode_pixels(padded)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise AssemblyError("Padded output is not decodable", detail={"error": repr(e)}) from e

    if expected != actual:
        raise AssemblyError(
            "Padded output decodes to different pixels than the image stream",
            detail={"stream_length": len(stream), "padded_length": len(padded)},
        )


def encode_to_target(
    raster: NormalizedRaster, *, target: TargetSpec, config: SizeTargetConfig
) -> EncodedArtifact:
    """
    Encode `raster` and adjust the byte count toward `target.preferred_bytes`.

    - baseline < preferred: pad with filler to exactly `preferred_bytes`
    - baseline >= preferred: emit the baseline unchanged, unless it exceeds
      `max_bytes` and the policy is REDUCE_QUALITY
    """

    baseline = encode_baseline(raster)
    baseline_length = len(baseline)
    quality = MAX_QUALITY
    stream = baseline

    if baseline_length > target.max_bytes:
        if config.oversize_policy == OversizePolicy.REDUCE_QUALITY:
            quality, stream = _search_quality(
                raster, ceiling_bytes=target.preferred_bytes, min_quality=config.min_quality
            )
            logger.info("baseline %d bytes > max %d; reduced to quality=%d", baseline_length, target.max_bytes, quality)
        else:
            logger.warning(
                "baseline encode is %d bytes, above max_bytes=%d; emitting unchanged",
                baseline_length,
                target.max_bytes,
            )

    if len(stream) >= target.preferred_bytes:
        data = stream
    else:
        data = pad_to_size(stream, target.preferred_bytes)
        if config.verify_trailing_data:
            verify_trailing_data(stream=stream, padded=data)

    artifact = EncodedArtifact(
        data=data,
        logical_image_length=len(stream),
        padding_length=len(data) - len(stream),
        baseline_length=baseline_length,
        quality=quality,
        within_window=target.within_window(len(data)),
    )
    logger.debug(
        "encoded baseline=%d stream=%d padding=%d total=%d",
        baseline_length,
        artifact.logical_image_length,
        artifact.padding_length,
        artifact.total_length,
    )
    return artifact
