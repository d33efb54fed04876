from .base import SectionSuggester, SuggestionError, sample_page_texts
from .gemini import GeminiSectionSuggester

__all__ = ["GeminiSectionSuggester", "SectionSuggester", "SuggestionError", "sample_page_texts"]
