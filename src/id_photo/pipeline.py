from __future__ import annotations

import asyncio
import logging
from typing import Any

from contracts.errors import PhotoPipelineError
from contracts.photo import EncodedArtifact, SourceImage, TargetSpec
from normalize_image import NormalizeImageConfig, decode_source_image, normalize_raster
from size_target import SizeTargetConfig, encode_to_target

from .contracts import IdPhotoError, IdPhotoResult

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Image processing failed, please retry."


def _source_meta(source: SourceImage) -> dict[str, Any]:
    return {
        "source_format": source.source_format,
        "source_width": source.width,
        "source_height": source.height,
        "source_size_bytes": source.size_bytes,
        "source_sha256": source.source_sha256,
        **source.decode_params,
    }


def _success(
    *, target: TargetSpec, artifact: EncodedArtifact, meta: dict[str, Any], encode_config: SizeTargetConfig
) -> IdPhotoResult:
    meta = {**meta, "oversize_policy": encode_config.oversize_policy.value}
    if not artifact.within_window:
        meta.setdefault("warnings", []).append(
            {
                "code": "PHOTO_OUTSIDE_SIZE_WINDOW",
                "total_length": artifact.total_length,
                "min_bytes": target.min_bytes,
                "max_bytes": target.max_bytes,
            }
        )
    return IdPhotoResult(ok=True, target=target, artifact=artifact, errors=[], meta=meta)


def _failure(*, target: TargetSpec, error: PhotoPipelineError, meta: dict[str, Any]) -> IdPhotoResult:
    # The caller only needs a generic signal; the cause goes to the log.
    logger.exception("id photo pipeline failed at %s: %s (%s)", error.stage, error.message, error.code)
    return IdPhotoResult(
        ok=False,
        target=target,
        artifact=None,
        errors=[IdPhotoError(code=error.code, stage=error.stage, message=GENERIC_FAILURE_MESSAGE, detail=error.detail)],
        meta=meta,
    )


def run_id_photo_pipeline(
    data: bytes,
    *,
    target: TargetSpec | None = None,
    normalize_config: NormalizeImageConfig | None = None,
    encode_config: SizeTargetConfig | None = None,
) -> IdPhotoResult:
    """
    Decode -> normalize -> size-targeted encode, as one synchronous unit of work.

    Each stage exclusively owns its output until handing it to the next; nothing
    is cached or shared between invocations.
    """

    target = target or TargetSpec.default()
    normalize_config = normalize_config or NormalizeImageConfig()
    encode_config = encode_config or SizeTargetConfig()
    meta: dict[str, Any] = {"fit_mode": normalize_config.fit_mode.value}

    try:
        source = decode_source_image(data, config=normalize_config)
        meta.update(_source_meta(source))
        raster = normalize_raster(source, target=target, config=normalize_config)
        del source
        artifact = encode_to_target(raster, target=target, config=encode_config)
    except PhotoPipelineError as e:
        return _failure(target=target, error=e, meta=meta)

    return _success(target=target, artifact=artifact, meta=meta, encode_config=encode_config)


async def run_id_photo_pipeline_async(
    data: bytes,
    *,
    target: TargetSpec | None = None,
    normalize_config: NormalizeImageConfig | None = None,
    encode_config: SizeTargetConfig | None = None,
) -> IdPhotoResult:
    """
    Awaitable variant: decode, normalize and encode each run in a worker thread, strictly one after the other.

    No timeout is imposed; cancellation belongs to the caller.
    """

    target = target or TargetSpec.default()
    normalize_config = normalize_config or NormalizeImageConfig()
    encode_config = encode_config or SizeTargetConfig()
    meta: dict[str, Any] = {"fit_mode": normalize_config.fit_mode.value}

    try:
        source = await asyncio.to_thread(decode_source_image, data, config=normalize_config)
        meta.update(_source_meta(source))
        raster = await asyncio.to_thread(normalize_raster, source, target=target, config=normalize_config)
        del source
        artifact = await asyncio.to_thread(encode_to_target, raster, target=target, config=encode_config)
    except PhotoPipelineError as e:
        return _failure(target=target, error=e, meta=meta)

    return _success(target=target, artifact=artifact, meta=meta, encode_config=encode_config)
