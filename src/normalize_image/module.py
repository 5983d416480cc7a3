from __future__ import annotations

import logging

from PIL import Image, ImageOps

from contracts.errors import DecodeError, RenderError
from contracts.photo import FitMode, NormalizedRaster, SourceImage, TargetSpec

from .contracts import NormalizeImageConfig
from .data_access import sha256_bytes
from .engines import PillowDecoder, Pypdfium2Decoder, SourceDecoder

logger = logging.getLogger(__name__)


def _get_decoder(data: bytes) -> SourceDecoder:
    for decoder in (Pypdfium2Decoder(), PillowDecoder()):
        if decoder.accepts(data):
            return decoder
    raise DecodeError("No decoder accepts the input")  # pragma: no cover


def decode_source_image(data: bytes, *, config: NormalizeImageConfig) -> SourceImage:
    """
    Decode raw input bytes into a `SourceImage`.

    Raises `DecodeError` when the bytes are empty or not a supported raster/PDF.
    """

    if not data:
        raise DecodeError("Input is empty")

    decoder = _get_decoder(data)
    decoded = decoder.decode(data, config=config)
    width, height = decoded.image.size
    if width <= 0 or height <= 0:
        raise DecodeError("Decoded image has zero area", detail={"width": width, "height": height})

    return SourceImage(
        image=decoded.image,
        width=int(width),
        height=int(height),
        source_format=decoded.source_format,
        source_sha256=sha256_bytes(data),
        size_bytes=len(data),
        decode_params=dict(decoded.decode_params),
    )


def _as_rgba(image: Image.Image) -> Image.Image:
    # P/LA/PA/CMYK/... all go through RGBA so transparency becomes a paste mask.
    if image.mode == "RGBA":
        return image
    return image.convert("RGBA")


def _place(rgba: Image.Image, *, size: tuple[int, int], config: NormalizeImageConfig) -> tuple[Image.Image, tuple[int, int]]:
    """
    Return (layer, top-left offset) for the configured fit mode.
    """

    method = config.resample.to_pillow()
    if config.fit_mode == FitMode.STRETCH:
        return rgba.resize(size, resample=method), (0, 0)
    if config.fit_mode == FitMode.COVER:
        return ImageOps.fit(rgba, size, method=method, centering=(0.5, 0.5)), (0, 0)
    if config.fit_mode == FitMode.CONTAIN:
        layer = ImageOps.contain(rgba, size, method=method)
        return layer, ((size[0] - layer.width) // 2, (size[1] - layer.height) // 2)
    raise ValueError(f"Unsupported fit mode: {config.fit_mode}")


def normalize_raster(
    source: SourceImage, *, target: TargetSpec, config: NormalizeImageConfig
) -> NormalizedRaster:
    """
    Produce an RGB raster of exactly `target.width x target.height`.

    The canvas is filled with `config.background` first, then the source is
    composited on top (its alpha, if any, blends against the background).
    """

    size = (target.width, target.height)
    try:
        canvas = Image.new("RGB", size, color=tuple(config.background))
    except (ValueError, MemoryError) as e:
        raise RenderError("Canvas could not be created", detail={"size": list(size), "error": repr(e)}) from e

    try:
        layer, offset = _place(_as_rgba(source.image), size=size, config=config)
        canvas.paste(layer, offset, mask=layer)
    except (ValueError, OSError, MemoryError) as e:
        raise RenderError("Source could not be drawn onto the canvas", detail={"error": repr(e)}) from e

    logger.debug(
        "normalized %dx%d -> %dx%d fit=%s",
        source.width,
        source.height,
        canvas.width,
        canvas.height,
        config.fit_mode.value,
    )
    return NormalizedRaster(
        image=canvas,
        width=canvas.width,
        height=canvas.height,
        background=tuple(config.background),
        fit_mode=config.fit_mode,
    )
