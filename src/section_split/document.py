"""
Document loading (collaborator of the export pipeline).

Load failures are raised as `DocumentLoadError` so callers can tell them apart
from the structured `SplitError`s returned by `run_export`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .contracts import ColorMode, SplitConfig, SplitEngineName
from .data_access import DataAccessError, resolve_under_data_root, sha256_bytes
from .engines import PdfDocumentHandle, PdfSplitEngine, Pypdfium2Engine

logger = logging.getLogger(__name__)

DEFAULT_FOLDER_NAME = "Exported_PDFs"


class DocumentLoadError(Exception):
    def __init__(self, message: str, *, name: str | None = None, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.name = name
        self.cause = cause


@dataclass(frozen=True, slots=True)
class SourceDocument:
    name: str
    size_bytes: int
    page_count: int
    handle: PdfDocumentHandle
    backend: str
    source_sha256: str | None = None
    backend_version: str | None = None

    def close(self) -> None:
        self.handle.close()

    def __enter__(self) -> SourceDocument:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def get_engine(engine: SplitEngineName) -> PdfSplitEngine:
    if engine == SplitEngineName.PYPDFIUM2:
        return Pypdfium2Engine()
    raise ValueError(f"Unsupported split engine: {engine}")


def default_folder_name(file_name: str) -> str:
    """
    Archive folder name derived from an uploaded file name: the last
    extension is stripped ("report.v2.pdf" -> "report.v2"). An empty result,
    as for ".pdf", falls back to DEFAULT_FOLDER_NAME.
    """

    base = file_name.replace("\\", "/").split("/")[-1]
    stem, dot, _ext = base.rpartition(".")
    if dot:
        base = stem
    base = base.strip()
    return base or DEFAULT_FOLDER_NAME


def load_document(*, data: bytes, name: str, config: SplitConfig | None = None) -> SourceDocument:
    config = config or SplitConfig()
    if not data:
        raise DocumentLoadError("Input PDF is empty", name=name)

    engine = get_engine(config.engine)
    try:
        handle = engine.open_document(data)
    except Exception as e:
        raise DocumentLoadError(
            "Failed to load PDF. It might be password protected or corrupted.", name=name, cause=e
        ) from e

    page_count = handle.page_count
    if page_count < 1:
        handle.close()
        raise DocumentLoadError("PDF has no pages", name=name)

    doc = SourceDocument(
        name=name,
        size_bytes=len(data),
        page_count=page_count,
        handle=handle,
        backend=engine.backend_id(),
        backend_version=engine.backend_version(),
        source_sha256=sha256_bytes(data) if config.compute_source_sha256 else None,
    )
    logger.info("Loaded %s: %d pages, %d bytes", name, page_count, len(data))
    return doc


def load_document_relpath(*, config: SplitConfig, pdf_relpath: str) -> SourceDocument:
    """
    Load a PDF referenced by a relative path under `config.data_root`.
    """

    if config.data_root is None:
        raise DocumentLoadError("data_root must be configured to load by relpath", name=pdf_relpath)
    if not pdf_relpath.lower().endswith(".pdf"):
        raise DocumentLoadError("Only PDF inputs are accepted (by .pdf extension)", name=pdf_relpath)

    try:
        pdf_file = resolve_under_data_root(data_root=config.data_root, relpath=pdf_relpath)
    except DataAccessError as e:
        raise DocumentLoadError(str(e), name=pdf_relpath, cause=e) from e

    if not pdf_file.exists():
        raise DocumentLoadError("Input PDF not found", name=pdf_relpath)

    return load_document(data=pdf_file.read_bytes(), name=pdf_file.name, config=config)


def render_page_png(
    *, document: SourceDocument, page_num: int, dpi: int = 150, color_mode: ColorMode = ColorMode.RGB
) -> bytes:
    """
    Render one 1-indexed page to PNG bytes for previewing.
    """

    if page_num < 1 or page_num > document.page_count:
        raise ValueError(f"Page out of range: {page_num} (1..{document.page_count})")
    return document.handle.render_page_png(page_num - 1, dpi=dpi, color_mode=color_mode)
