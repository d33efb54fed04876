from __future__ import annotations

import logging

from .contracts import ExtractedSection, Section, SplitError, SplitErrorCode
from .document import SourceDocument
from .validation import invalid_range_error, is_range_valid

logger = logging.getLogger(__name__)


class InvalidRangeError(Exception):
    def __init__(self, error: SplitError) -> None:
        super().__init__(error.message)
        self.error = error


class ExtractionError(Exception):
    def __init__(self, section: Section, cause: BaseException) -> None:
        super().__init__(f"Failed to extract section {section.name!r}: {cause!r}")
        self.section = section
        self.cause = cause

    def to_error(self) -> SplitError:
        return SplitError(
            code=SplitErrorCode.EXTRACTION_FAILED.value,
            message=f"Failed to extract section: {self.section.name}",
            detail={
                "section_id": self.section.section_id,
                "section_name": self.section.name,
                "error": repr(self.cause),
            },
        )


def section_page_indices(section: Section) -> list[int]:
    """
    0-indexed page indices for the inclusive 1-indexed range [start, end].
    """

    return list(range(section.start_page - 1, section.end_page))


def extract_section(*, document: SourceDocument, section: Section) -> ExtractedSection:
    """
    Copy the pages of `section` into a new, independent PDF.

    The range must already be valid for `document`; it is re-checked and
    rejected with `InvalidRangeError` rather than silently clamped.
    """

    if not is_range_valid(section, total_pages=document.page_count):
        raise InvalidRangeError(invalid_range_error(section, total_pages=document.page_count))

    indices = section_page_indices(section)
    try:
        pdf_bytes = document.handle.extract_pages(indices)
    except Exception as e:
        raise ExtractionError(section, e) from e

    logger.debug(
        "Extracted %r: pages %d-%d (%d bytes)", section.name, section.start_page, section.end_page, len(pdf_bytes)
    )
    return ExtractedSection(section=section, pdf_bytes=pdf_bytes, page_count=section.page_count)
