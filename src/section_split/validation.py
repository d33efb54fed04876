from __future__ import annotations

from collections.abc import Sequence

from .contracts import Section, SplitError, SplitErrorCode


def is_range_valid(section: Section, *, total_pages: int) -> bool:
    return 1 <= section.start_page <= section.end_page <= total_pages


def invalid_range_error(section: Section, *, total_pages: int) -> SplitError:
    return SplitError(
        code=SplitErrorCode.INVALID_RANGE.value,
        message=f"Invalid page range in section: {section.name}",
        detail={
            "section_id": section.section_id,
            "section_name": section.name,
            "start_page": section.start_page,
            "end_page": section.end_page,
            "total_pages": total_pages,
        },
    )


def validate_sections(*, sections: Sequence[Section], total_pages: int) -> SplitError | None:
    """
    Check a section list against a document's page count before any
    extraction.

    Returns None when every section satisfies 1 <= start <= end <= total_pages,
    otherwise the error for the first offending section in list order.
    """

    if total_pages < 1:
        raise ValueError("total_pages must be >= 1")

    if not sections:
        return SplitError(
            code=SplitErrorCode.EMPTY_SECTION_LIST.value,
            message="No sections to export",
            detail={"total_pages": total_pages},
        )

    for section in sections:
        if not is_range_valid(section, total_pages=total_pages):
            return invalid_range_error(section, total_pages=total_pages)

    return None
