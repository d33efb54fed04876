from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from .contracts import (
    ExportResult,
    ExportState,
    ExtractedSection,
    Section,
    SplitConfig,
    SplitError,
    SplitErrorCode,
)
from .document import SourceDocument
from .extraction import ExtractionError, InvalidRangeError, extract_section
from .packaging import PackagingError, package_artifacts
from .validation import validate_sections

logger = logging.getLogger(__name__)


def _cancelled_error(*, stage: ExportState, completed: int, total: int) -> SplitError:
    return SplitError(
        code=SplitErrorCode.CANCELLED.value,
        message="Export cancelled",
        detail={"stage": stage.value, "sections_completed": completed, "sections_total": total},
    )


def run_export(
    *,
    document: SourceDocument,
    sections: Sequence[Section],
    folder_name: str,
    config: SplitConfig | None = None,
    should_cancel: Callable[[], bool] | None = None,
    on_state: Callable[[ExportState], None] | None = None,
) -> ExportResult:
    """
    Validate -> extract (per section, in order) -> package.

    The whole section list is validated before any page is copied. The first
    failure at any stage ends the run with exactly one error and no archive.
    `should_cancel` is polled between sections and before packaging.
    """

    config = config or SplitConfig()
    sections = list(sections)
    meta: dict[str, Any] = {
        "source_name": document.name,
        "source_page_count": document.page_count,
        "backend": document.backend,
        "backend_version": document.backend_version,
        "section_count": len(sections),
    }
    if document.source_sha256 is not None:
        meta["source_sha256"] = document.source_sha256

    state = ExportState.IDLE

    def _enter(next_state: ExportState) -> None:
        nonlocal state
        state = next_state
        if on_state is not None:
            on_state(next_state)

    def _fail(error: SplitError) -> ExportResult:
        failed_stage = state
        _enter(ExportState.FAILED)
        return ExportResult(
            ok=False,
            state=ExportState.FAILED,
            folder_name=folder_name,
            archive=None,
            errors=[error],
            meta={**meta, "failed_stage": failed_stage.value},
        )

    _enter(ExportState.VALIDATING)
    error = validate_sections(sections=sections, total_pages=document.page_count)
    if error is not None:
        logger.warning("Validation failed: %s", error.message)
        return _fail(error)

    _enter(ExportState.EXTRACTING)
    extracted: list[ExtractedSection] = []
    for section in sections:
        if should_cancel is not None and should_cancel():
            logger.info("Export cancelled after %d of %d sections", len(extracted), len(sections))
            return _fail(_cancelled_error(stage=state, completed=len(extracted), total=len(sections)))
        try:
            extracted.append(extract_section(document=document, section=section))
        except InvalidRangeError as e:
            return _fail(e.error)
        except ExtractionError as e:
            logger.error("%s", e)
            return _fail(e.to_error())

    if should_cancel is not None and should_cancel():
        logger.info("Export cancelled before packaging")
        return _fail(_cancelled_error(stage=state, completed=len(extracted), total=len(sections)))

    _enter(ExportState.PACKAGING)
    try:
        archive = package_artifacts(
            artifacts=[(x.section.name, x.pdf_bytes) for x in extracted],
            folder_name=folder_name,
            compression=config.compression,
        )
    except PackagingError as e:
        logger.error("%s", e)
        return _fail(e.to_error())

    _enter(ExportState.DONE)
    return ExportResult(
        ok=True,
        state=ExportState.DONE,
        folder_name=folder_name,
        archive=archive,
        errors=[],
        meta={**meta, "page_counts": [x.page_count for x in extracted]},
    )
