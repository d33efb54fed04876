from __future__ import annotations

import io

from ..contracts import ColorMode

from .base import PdfDocumentHandle, PdfSplitEngine


def _require_pdfium():
    try:
        import pypdfium2 as pdfium  # type: ignore

        return pdfium
    except ImportError as e:
        raise RuntimeError("Missing dependency: pypdfium2 is required for PDF splitting.") from e


class Pypdfium2Document(PdfDocumentHandle):
    def __init__(self, pdf) -> None:
        self._pdf = pdf

    @property
    def page_count(self) -> int:
        return len(self._pdf)

    def _check_index(self, page_index: int) -> None:
        if page_index < 0 or page_index >= len(self._pdf):
            raise IndexError(f"Page index out of range: {page_index} (0..{len(self._pdf) - 1})")

    def extract_pages(self, page_indices: list[int]) -> bytes:
        pdfium = _require_pdfium()
        for i in page_indices:
            self._check_index(i)

        out = pdfium.PdfDocument.new()
        try:
            out.import_pages(self._pdf, pages=list(page_indices))
            buf = io.BytesIO()
            out.save(buf)
            return buf.getvalue()
        finally:
            out.close()

    def page_text(self, page_index: int) -> str:
        self._check_index(page_index)
        page = self._pdf[page_index]
        textpage = page.get_textpage()
        try:
            return textpage.get_text_range()
        finally:
            textpage.close()
            page.close()

    def render_page_png(self, page_index: int, *, dpi: int, color_mode: ColorMode) -> bytes:
        self._check_index(page_index)
        scale = dpi / 72.0  # PDF points are 1/72 inch

        page = self._pdf[page_index]
        try:
            bitmap = page.render(scale=scale)
            pil_img = bitmap.to_pil()
        finally:
            page.close()

        if color_mode == ColorMode.GRAY:
            pil_img = pil_img.convert("L")
        else:
            pil_img = pil_img.convert("RGB")

        buf = io.BytesIO()
        pil_img.save(buf, format="PNG")
        return buf.getvalue()

    def close(self) -> None:
        self._pdf.close()


class Pypdfium2Engine(PdfSplitEngine):
    def backend_id(self) -> str:
        return "pypdfium2"

    def backend_version(self) -> str | None:
        try:
            import pypdfium2 as pdfium  # type: ignore
        except ImportError:
            return None
        version = getattr(pdfium, "__version__", None) or getattr(pdfium, "PYPDFIUM_INFO", None)
        return str(version) if version is not None else None

    def open_document(self, data: bytes) -> Pypdfium2Document:
        pdfium = _require_pdfium()
        # pdfium raises PdfiumError for corrupted input and for encrypted
        # documents opened without a password.
        pdf = pdfium.PdfDocument(data)
        return Pypdfium2Document(pdf)
