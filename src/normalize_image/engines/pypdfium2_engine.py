from __future__ import annotations

import logging

from contracts.errors import DecodeError

from ..contracts import NormalizeImageConfig
from .base import EngineDecodedImage, SourceDecoder

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF-"


class Pypdfium2Decoder(SourceDecoder):
    """
    Renders one page of a PDF (e.g. a scanned photo) to a raster source.
    """

    def backend_id(self) -> str:
        return "pypdfium2"

    def backend_version(self) -> str | None:
        try:
            import pypdfium2.version as pdfium_version  # type: ignore
        except ImportError:
            return None
        # pypdfium2 leaves __version__ unset; pypdfium2.version carries it.
        info = getattr(pdfium_version, "PYPDFIUM_INFO", None)
        if info is not None and getattr(info, "version", None):
            return str(info.version)
        return getattr(pdfium_version, "V_PYPDFIUM2", None)

    def _require_pdfium(self):
        try:
            import pypdfium2 as pdfium  # type: ignore

            return pdfium
        except ImportError as e:
            raise DecodeError("Missing dependency: pypdfium2 is required for PDF sources.") from e

    def accepts(self, data: bytes) -> bool:
        return data[:1024].lstrip().startswith(PDF_MAGIC)

    def decode(self, data: bytes, *, config: NormalizeImageConfig) -> EngineDecodedImage:
        pdfium = self._require_pdfium()
        try:
            doc = pdfium.PdfDocument(data)
        except pdfium.PdfiumError as e:
            raise DecodeError("PDF source could not be opened", detail={"error": repr(e)}) from e

        try:
            page_count = len(doc)
            if config.pdf_page_num > page_count:
                raise DecodeError(
                    f"Page out of range: {config.pdf_page_num} (1..{page_count})",
                    detail={"pdf_page_num": config.pdf_page_num, "page_count": page_count},
                )

            scale = config.pdf_dpi / 72.0  # PDF points are 1/72 inch
            try:
                page = doc[config.pdf_page_num - 1]
                bitmap = page.render(scale=scale)
                # to_pil() shares memory with the bitmap; convert() detaches it.
                image = bitmap.to_pil().convert("RGB")
            except pdfium.PdfiumError as e:
                raise DecodeError("PDF page rendering failed", detail={"error": repr(e)}) from e
        finally:
            doc.close()

        logger.debug("rendered PDF page %d at %d dpi -> %dx%d", config.pdf_page_num, config.pdf_dpi, *image.size)
        return EngineDecodedImage(
            image=image,
            source_format="PDF",
            decode_params={
                "backend": self.backend_id(),
                "backend_version": self.backend_version(),
                "pdf_dpi": config.pdf_dpi,
                "pdf_page_num": config.pdf_page_num,
                "page_count": page_count,
            },
        )
