from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class ColorMode(str, Enum):
    RGB = "rgb"
    GRAY = "gray"


class SplitEngineName(str, Enum):
    """
    PDF backend identifiers.
    """

    PYPDFIUM2 = "pypdfium2"


class ArchiveCompression(str, Enum):
    DEFLATED = "deflated"
    STORED = "stored"


class ExportState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    EXTRACTING = "extracting"
    PACKAGING = "packaging"
    DONE = "done"
    FAILED = "failed"


class SplitErrorCode(str, Enum):
    EMPTY_SECTION_LIST = "SPLIT_EMPTY_SECTION_LIST"
    INVALID_RANGE = "SPLIT_INVALID_RANGE"
    EXTRACTION_FAILED = "SPLIT_EXTRACTION_FAILED"
    PACKAGING_FAILED = "SPLIT_PACKAGING_FAILED"
    CANCELLED = "SPLIT_CANCELLED"
    DOCUMENT_LOAD_FAILED = "SPLIT_DOCUMENT_LOAD_FAILED"


@dataclass(frozen=True, slots=True)
class SplitError:
    code: str
    message: str
    detail: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class Section:
    """
    A named page-range request over a source document.

    Pages are 1-indexed and inclusive. The range itself is NOT checked here:
    an out-of-bounds or inverted range must stay representable so that
    `validate_sections` can report it against the document's page count.
    """

    section_id: str
    name: str
    start_page: int
    end_page: int

    def __post_init__(self) -> None:
        if not isinstance(self.section_id, str) or not self.section_id:
            raise ValueError("section_id must be a non-empty string")
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("section name must be a non-empty string")
        for attr in ("start_page", "end_page"):
            value = getattr(self, attr)
            # bool is an int subclass; reject it explicitly.
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{attr} must be an int, got {type(value).__name__}")

    @property
    def page_count(self) -> int:
        return self.end_page - self.start_page + 1


@dataclass(frozen=True, slots=True)
class ExtractedSection:
    section: Section
    pdf_bytes: bytes
    page_count: int


@dataclass(frozen=True, slots=True)
class ExtractedArtifact:
    file_name: str  # collision-resolved archive entry name
    payload: bytes


@dataclass(frozen=True, slots=True)
class Archive:
    file_name: str  # suggested download name, "<folder>.zip"
    entries: tuple[ExtractedArtifact, ...]
    data: bytes

    @property
    def entry_names(self) -> list[str]:
        return [e.file_name for e in self.entries]


@dataclass(frozen=True, slots=True)
class ExportResult:
    """
    Outcome of one export run.

    On failure `ok` is False, `archive` is None and `errors` holds exactly one
    structured error. No partial archive is ever attached.
    """

    ok: bool
    state: ExportState
    folder_name: str
    archive: Archive | None
    errors: list[SplitError]
    meta: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """
        JSON-ready representation. Raw bytes are summarized, never embedded.
        """

        archive: dict[str, Any] | None = None
        if self.archive is not None:
            archive = {
                "file_name": self.archive.file_name,
                "size_bytes": len(self.archive.data),
                "entries": [
                    {"file_name": e.file_name, "size_bytes": len(e.payload)}
                    for e in self.archive.entries
                ],
            }
        return {
            "ok": self.ok,
            "state": self.state.value,
            "folder_name": self.folder_name,
            "archive": archive,
            "errors": [
                {"code": e.code, "message": e.message, "detail": e.detail} for e in self.errors
            ],
            "meta": self.meta,
        }


@dataclass(frozen=True, slots=True)
class SplitConfig:
    """
    Export configuration.

    Data access rule: `data_root` must be passed explicitly by the caller.
    Library modules never read environment variables.
    """

    data_root: Path | None = None
    engine: SplitEngineName = SplitEngineName.PYPDFIUM2
    compression: ArchiveCompression = ArchiveCompression.DEFLATED
    compute_source_sha256: bool = False

    def __post_init__(self) -> None:
        if self.data_root is not None and not isinstance(self.data_root, Path):
            raise TypeError("data_root must be pathlib.Path")


@dataclass(frozen=True, slots=True)
class SuggestConfig:
    """
    Section suggestion service configuration.

    `api_key` is resolved by the application (CLI) and passed in explicitly.
    """

    api_key: str
    model: str = "gemini-2.5-flash"
    base_url: str = "https://generativelanguage.googleapis.com"
    timeout_s: float = 60.0
    max_sample_pages: int = 10
    sample_chars_per_page: int = 1000
    trust_env: bool = True

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("Missing Gemini API key")
        if self.max_sample_pages < 1:
            raise ValueError("max_sample_pages must be >= 1")
        if self.sample_chars_per_page < 1:
            raise ValueError("sample_chars_per_page must be >= 1")
