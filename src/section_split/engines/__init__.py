from .base import PdfDocumentHandle, PdfSplitEngine
from .pypdfium2_engine import Pypdfium2Document, Pypdfium2Engine

__all__ = ["PdfDocumentHandle", "PdfSplitEngine", "Pypdfium2Document", "Pypdfium2Engine"]
