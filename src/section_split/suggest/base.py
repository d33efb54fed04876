from __future__ import annotations

from abc import ABC, abstractmethod

from ..contracts import Section
from ..document import SourceDocument


class SuggestionError(Exception):
    pass


class SectionSuggester(ABC):
    """
    Proposes a section list for a document.

    Suggestions get no special trust: they are typed through
    `sections_from_records` and validated like manual input before export.
    """

    @abstractmethod
    def suggest(self, document: SourceDocument) -> list[Section]:
        raise NotImplementedError


def sample_page_texts(document: SourceDocument, *, max_pages: int, chars_per_page: int) -> list[str]:
    """
    "Page N: <text>" samples from the first `max_pages` pages.
    """

    samples: list[str] = []
    for page_index in range(min(document.page_count, max_pages)):
        text = " ".join(document.handle.page_text(page_index).split())
        samples.append(f"Page {page_index + 1}: {text[:chars_per_page]}")
    return samples
