from __future__ import annotations

import io
import logging

import PIL
from PIL import Image, ImageOps, UnidentifiedImageError

from contracts.errors import DecodeError

from ..contracts import NormalizeImageConfig
from .base import EngineDecodedImage, SourceDecoder

logger = logging.getLogger(__name__)


class PillowDecoder(SourceDecoder):
    """
    Raster decoder for every format Pillow can open (JPEG, PNG, WebP, BMP, ...).
    """

    def backend_id(self) -> str:
        return "pillow"

    def backend_version(self) -> str | None:
        return PIL.__version__

    def accepts(self, data: bytes) -> bool:
        # Fallback decoder: Pillow sniffs the format itself.
        return True

    def decode(self, data: bytes, *, config: NormalizeImageConfig) -> EngineDecodedImage:
        try:
            with Image.open(io.BytesIO(data)) as opened:
                opened.load()
                source_format = opened.format or "UNKNOWN"
                if config.apply_exif_orientation:
                    image = ImageOps.exif_transpose(opened)
                else:
                    image = opened.copy()
        except (UnidentifiedImageError, Image.DecompressionBombError) as e:
            raise DecodeError("Input is not a decodable raster image", detail={"error": repr(e)}) from e
        except (OSError, ValueError, SyntaxError) as e:
            raise DecodeError("Raster image data is corrupt or truncated", detail={"error": repr(e)}) from e

        logger.debug("decoded %s source %dx%d mode=%s", source_format, image.width, image.height, image.mode)
        return EngineDecodedImage(
            image=image,
            source_format=source_format,
            decode_params={
                "backend": self.backend_id(),
                "backend_version": self.backend_version(),
                "exif_orientation_applied": config.apply_exif_orientation,
            },
        )
