"""
Section-based PDF splitting and packaging.

Pipeline (one export run, stateless between runs):
- Validate every section's 1-indexed inclusive page range up front
- Extract each section, in order, into an independent PDF
- Package the PDFs into one ZIP with collision-free entry names

No partial archive is ever produced: the first failure ends the run with a
structured `SplitError`. Document load failures are raised separately as
`DocumentLoadError`.
"""

from .contracts import (
    Archive,
    ArchiveCompression,
    ColorMode,
    ExportResult,
    ExportState,
    ExtractedArtifact,
    ExtractedSection,
    Section,
    SplitConfig,
    SplitEngineName,
    SplitError,
    SplitErrorCode,
    SuggestConfig,
)
from .document import DocumentLoadError, SourceDocument, load_document, load_document_relpath
from .module import run_export
from .validation import validate_sections

__all__ = [
    "Archive",
    "ArchiveCompression",
    "ColorMode",
    "DocumentLoadError",
    "ExportResult",
    "ExportState",
    "ExtractedArtifact",
    "ExtractedSection",
    "Section",
    "SourceDocument",
    "SplitConfig",
    "SplitEngineName",
    "SplitError",
    "SplitErrorCode",
    "SuggestConfig",
    "load_document",
    "load_document_relpath",
    "run_export",
    "validate_sections",
]
