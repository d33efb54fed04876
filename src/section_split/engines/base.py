from __future__ import annotations

from abc import ABC, abstractmethod

from ..contracts import ColorMode


class PdfDocumentHandle(ABC):
    """
    A parsed source PDF, addressable by page.

    Handles are read-only: extraction produces new documents and never
    modifies the source. Page arguments are 0-indexed at this layer; callers
    own the conversion from 1-indexed section ranges.
    """

    @property
    @abstractmethod
    def page_count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def extract_pages(self, page_indices: list[int]) -> bytes:
        """
        Return the bytes of a new, independent PDF holding exactly
        `page_indices` (0-indexed) in the given order.
        """

        raise NotImplementedError

    @abstractmethod
    def page_text(self, page_index: int) -> str:
        raise NotImplementedError

    @abstractmethod
    def render_page_png(self, page_index: int, *, dpi: int, color_mode: ColorMode) -> bytes:
        raise NotImplementedError

    def close(self) -> None:
        return None


class PdfSplitEngine(ABC):
    """
    PDF backend abstraction.

    Engines must:
    - Parse raw bytes into a `PdfDocumentHandle` or raise
    - Copy pages without altering their content
    """

    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    def backend_version(self) -> str | None:
        return None

    @abstractmethod
    def open_document(self, data: bytes) -> PdfDocumentHandle:
        raise NotImplementedError
